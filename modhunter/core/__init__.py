"""
Core data structures and utilities for Modhunter.

Modules:
    models: Pydantic models for the per-protein accumulator and its residues
    sequence: Sequence cleaning, FASTA parsing and the in-silico tryptic digest
"""

from .models import ConfirmedModification, ResidueRecord, SequenceModel
from .sequence import (
    STANDARD_AA,
    InvalidInputError,
    SequenceError,
    SequenceValidator,
    clean_sequence,
    count_tryptic_sites,
    parse_fasta,
    tryptic_cleavage_sites,
    tryptic_digest,
    tryptic_total,
)

__all__ = [
    # Models
    "SequenceModel",
    "ResidueRecord",
    "ConfirmedModification",
    # Sequence utilities
    "SequenceValidator",
    "SequenceError",
    "InvalidInputError",
    "clean_sequence",
    "parse_fasta",
    "STANDARD_AA",
    # Tryptic digest
    "tryptic_cleavage_sites",
    "count_tryptic_sites",
    "tryptic_total",
    "tryptic_digest",
]
