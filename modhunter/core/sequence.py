"""
Sequence handling utilities for Modhunter.

This module provides sequence cleaning and validation, FASTA parsing, and the
in-silico tryptic digest whose fragment count is used as the denominator of
the abundance estimate.
"""

from __future__ import annotations

import re
from io import StringIO
from pathlib import Path
from typing import Iterator, Optional, Union

from Bio import SeqIO


# Standard amino acid alphabet
STANDARD_AA = set("ACDEFGHIKLMNPQRSTVWY")

# Trypsin cleaves C-terminal to these residues...
TRYPSIN_SITES = set("KR")
# ...unless the next residue is proline
TRYPSIN_BLOCKER = "P"

_NON_LETTERS = re.compile(r"[^A-Z]")


class SequenceError(Exception):
    """Exception raised for sequence-related errors."""
    pass


class InvalidInputError(SequenceError, ValueError):
    """Raised when a sequence cannot be loaded (empty or not letters-only)."""
    pass


def clean_sequence(sequence: Optional[str]) -> str:
    """
    Upper-case a sequence and strip everything outside A-Z.

    Evidence sources report peptides against the cleaned sequence, so the
    same cleaning must be applied before loading.

    Args:
        sequence: Raw sequence text (may contain whitespace, digits, gaps)

    Returns:
        Cleaned sequence, possibly empty
    """
    if not sequence:
        return ""
    return _NON_LETTERS.sub("", sequence.upper())


class SequenceValidator:
    """
    Validates protein sequences before a model is built for them.

    Loading only requires a non-empty letters-only sequence; the validator
    adds optional checks that are useful when reading sequences from files.
    """

    MIN_LENGTH = 1

    def __init__(
        self,
        allow_ambiguous: bool = True,
        min_length: int = MIN_LENGTH,
    ):
        """
        Initialize validator with specific constraints.

        Args:
            allow_ambiguous: Allow letters outside the 20 standard amino acids
            min_length: Minimum sequence length
        """
        self.allow_ambiguous = allow_ambiguous
        self.min_length = min_length

    def validate(self, sequence: str) -> tuple[bool, list[str]]:
        """
        Validate a sequence and return status with error messages.

        Args:
            sequence: Protein sequence to validate

        Returns:
            Tuple of (is_valid, list_of_error_messages)
        """
        errors = []

        if not sequence:
            errors.append("Sequence is empty")
            return False, errors

        if len(sequence) < self.min_length:
            errors.append(f"Sequence too short: {len(sequence)} < {self.min_length}")

        invalid_chars = set(_NON_LETTERS.findall(sequence))
        if invalid_chars:
            errors.append(f"Invalid characters: {sorted(invalid_chars)}")
        elif not self.allow_ambiguous:
            nonstandard = set(sequence) - STANDARD_AA
            if nonstandard:
                errors.append(f"Non-standard residues: {sorted(nonstandard)}")

        return len(errors) == 0, errors

    def check(self, sequence: Optional[str]) -> str:
        """
        Validate a sequence, raising on failure.

        Raises:
            InvalidInputError: If the sequence fails validation
        """
        is_valid, errors = self.validate(sequence or "")
        if not is_valid:
            raise InvalidInputError("; ".join(errors))
        return sequence


def parse_fasta(
    source: Union[str, Path, StringIO],
    clean: bool = True,
) -> Iterator[tuple[str, str]]:
    """
    Parse protein sequences from FASTA format.

    Args:
        source: File path, FASTA string, or StringIO object
        clean: Apply ``clean_sequence`` to each record

    Yields:
        ``(record_id, sequence)`` tuples

    Raises:
        SequenceError: If a record has no usable sequence
    """
    close_handle = False
    if isinstance(source, str) and (source.startswith(">") or "\n>" in source):
        handle = StringIO(source)
    elif isinstance(source, (str, Path)):
        handle = open(source, "r")
        close_handle = True
    else:
        handle = source

    try:
        for record in SeqIO.parse(handle, "fasta"):
            seq_str = str(record.seq)
            if clean:
                seq_str = clean_sequence(seq_str)
            if not seq_str:
                raise SequenceError(f"Sequence '{record.id}' is empty")
            yield record.id, seq_str
    finally:
        if close_handle:
            handle.close()


# =============================================================================
# In-silico tryptic digest
# =============================================================================

def tryptic_cleavage_sites(sequence: str) -> list[int]:
    """
    Positions after which trypsin cleaves.

    A site follows every K or R that is not followed by P. The final residue
    never produces a site.

    Args:
        sequence: Cleaned protein sequence

    Returns:
        0-based indices of residues that end a tryptic fragment
    """
    return [
        i for i in range(len(sequence) - 1)
        if sequence[i] in TRYPSIN_SITES and sequence[i + 1] != TRYPSIN_BLOCKER
    ]


def count_tryptic_sites(sequence: str) -> int:
    """Number of tryptic cleavage sites in ``sequence``."""
    return len(tryptic_cleavage_sites(sequence))


def tryptic_total(sequence: str) -> int:
    """
    Number of fragments of a complete tryptic digest.

    Approximates how many tryptic peptides are theoretically observable for
    the protein; always at least 1.
    """
    return 1 + count_tryptic_sites(sequence)


def tryptic_digest(sequence: str) -> list[str]:
    """
    Fragments of a complete in-silico tryptic digest, in sequence order.

    >>> tryptic_digest("MKPVKRAG")
    ['MKPVK', 'R', 'AG']
    """
    if not sequence:
        return []
    fragments = []
    start = 0
    for site in tryptic_cleavage_sites(sequence):
        fragments.append(sequence[start:site + 1])
        start = site + 1
    fragments.append(sequence[start:])
    return fragments
