"""
High-level Modhunter interface.

The typical lifecycle for one protein is::

    model = load(sequence)
    aggregate(model, source)   # once per completed evidence source, any order
    recompute(model)           # whenever current scores are needed

``recompute`` is idempotent and reflects whatever evidence has arrived so
far. Nothing here blocks or locks: callers that aggregate from several
threads must serialize calls against the same model.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .aggregation import AggregationReport, CoverageAggregator
from .core.models import ResidueRecord, SequenceModel
from .core.sequence import SequenceValidator, tryptic_total
from .scoring import AbundanceEstimator, ScoreCalculator, ScoringConfig

logger = logging.getLogger(__name__)

_validator = SequenceValidator(allow_ambiguous=True)
_aggregator = CoverageAggregator()


def load(sequence: str, sequence_id: Optional[str] = None) -> SequenceModel:
    """
    Build a zeroed model for a cleaned amino-acid sequence.

    Args:
        sequence: Non-empty, upper-case, letters-only sequence
        sequence_id: Optional accession for reporting

    Returns:
        SequenceModel with one record per residue and the tryptic total set

    Raises:
        InvalidInputError: If the sequence is empty or not letters-only
    """
    _validator.check(sequence)

    model = SequenceModel(
        whole_sequence=sequence,
        sequence_id=sequence_id,
        residues=[ResidueRecord(residue=aa) for aa in sequence],
        tryptic_total=tryptic_total(sequence),
    )
    logger.info(
        f"Loaded {sequence_id or 'sequence'} ({len(sequence)} residues, "
        f"{model.tryptic_total} tryptic peptides)"
    )
    return model


def aggregate(model: SequenceModel, source: Any) -> AggregationReport:
    """Fold one evidence source into ``model``; see ``CoverageAggregator``."""
    return _aggregator.aggregate(model, source)


def recompute(model: SequenceModel, config: Optional[ScoringConfig] = None) -> SequenceModel:
    """
    Re-derive abundance, terminal zones and per-residue scores.

    Args:
        model: Model to update in place
        config: Scoring parameters (defaults if None)

    Returns:
        The same model, for chaining
    """
    AbundanceEstimator(config).estimate(model)
    ScoreCalculator(config).score(model)
    return model


def annotate(
    sequence: str,
    sources: Iterable[Any] = (),
    sequence_id: Optional[str] = None,
    config: Optional[ScoringConfig] = None,
) -> SequenceModel:
    """
    Load a sequence, aggregate all sources and score it.

    Example:
        >>> from modhunter import annotate
        >>> from modhunter.sources import PpdbSource
        >>> model = annotate("MKWVTFISLLLLFSSAYS", [PpdbSource({"peptides": []})])
        >>> model.abundance_score
        0
    """
    model = load(sequence, sequence_id)
    for source in sources:
        aggregate(model, source)
    return recompute(model, config)


class Modhunter:
    """
    Session object owning the model of one protein.

    Convenient for callers that receive evidence asynchronously: each
    completion handler calls ``add`` and the presentation layer reads
    ``scores`` after ``recompute``.
    """

    def __init__(
        self,
        sequence: str,
        sequence_id: Optional[str] = None,
        config: Optional[ScoringConfig] = None,
    ):
        self.config = config
        self.model = load(sequence, sequence_id)
        self.reports: list[AggregationReport] = []

    def __repr__(self) -> str:
        return (
            f"Modhunter(sequence_id={self.model.sequence_id!r}, "
            f"length={self.model.sequence_length}, sources={len(self.reports)})"
        )

    def add(self, source: Any) -> AggregationReport:
        """Aggregate one completed source."""
        report = aggregate(self.model, source)
        self.reports.append(report)
        return report

    def recompute(self) -> SequenceModel:
        return recompute(self.model, self.config)

    @property
    def scores(self) -> list[int]:
        return self.model.scores

    @property
    def abundance_score(self) -> int:
        return self.model.abundance_score

    @property
    def confirmed_mods(self) -> list[tuple[int, str]]:
        return [m.as_tuple() for m in self.model.confirmed_mods]
