"""
Modhunter: per-residue scoring of likely unreported post-translational
modification sites.

Proteomics databases report which peptides of a protein have been observed.
For an abundant protein, residues that should be observable (they lie in a
predicted proteotypic peptide) but are rarely or never seen unmodified are
good candidates for carrying a modification that shifts the peptide's mass
out of the search space. Modhunter combines evidence from many differently
shaped sources into per-residue counters and turns them into a 0-100 score.

Key components:
    - core: Per-protein data model, sequence handling, tryptic digest
    - sources: Evidence source adapters and their registry
    - aggregation: Folding normalized evidence into the model
    - scoring: Abundance estimation and per-residue scores
    - export: TSV/JSON result export
    - cli: Command-line interface

Basic usage:
    >>> from modhunter import load, aggregate, recompute
    >>> from modhunter.sources import PpdbSource, ProteotypicSource
    >>>
    >>> model = load("MKWVTFISLLLLFSSAYSRGVFRRDTHK", sequence_id="AT1G01010")
    >>> report = aggregate(model, PpdbSource({"peptides": [{"sequence": "GVFR", "experiments": [1, 2]}]}))
    >>> report = aggregate(model, ProteotypicSource({"peptides": [{"sequence": "WVTFISLLLLFSSAYSR"}]}))
    >>> model = recompute(model)
    >>> print(f"Abundance: {model.abundance_score}")
    >>> for i, residue in enumerate(model.residues):
    ...     if residue.score:
    ...         print(f"  {residue.residue}{i + 1}: {residue.score}")
"""

__version__ = "0.1.0"

from .aggregation import AggregationReport, CoverageAggregator
from .core.models import ConfirmedModification, ResidueRecord, SequenceModel
from .core.sequence import InvalidInputError, SequenceError, clean_sequence
from .engine import Modhunter, aggregate, annotate, load, recompute
from .scoring import AbundanceEstimator, ScoreCalculator, ScoringConfig
from .sources import (
    EvidenceKind,
    EvidenceSource,
    UnknownSourceError,
    get_source,
    list_sources,
)

__all__ = [
    # Version
    "__version__",
    # Main functions
    "load",
    "aggregate",
    "recompute",
    "annotate",
    "Modhunter",
    # Models
    "SequenceModel",
    "ResidueRecord",
    "ConfirmedModification",
    # Errors
    "InvalidInputError",
    "SequenceError",
    "UnknownSourceError",
    # Sequence utilities
    "clean_sequence",
    # Components
    "CoverageAggregator",
    "AggregationReport",
    "AbundanceEstimator",
    "ScoreCalculator",
    "ScoringConfig",
    # Sources
    "EvidenceKind",
    "EvidenceSource",
    "get_source",
    "list_sources",
]
