"""
Coverage aggregation.

Folds one source's normalized evidence into a ``SequenceModel``. Sources
complete independently, so the aggregator is invoked once per completed
source in whatever order results arrive, possibly repeatedly for the same
source. Each call takes an immutable ``EvidenceBatch`` snapshot and applies
it to the model; counters only grow.

Evidence that cannot be placed on the sequence (a peptide that is not a
substring, a position outside the protein) is dropped item by item and
counted on the model, never raised. A source whose kind is not recognized
is ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..core.models import ConfirmedModification, SequenceModel
from ..sources.base import EvidenceBatch, EvidenceKind, EvidenceSource, ModificationSite

logger = logging.getLogger(__name__)


@dataclass
class AggregationReport:
    """
    Outcome of one aggregation call.

    Attributes:
        source: Source name
        kind: Evidence kind, None when the source was ignored
        applied: Evidence items folded into the model
        dropped: Evidence items that could not be placed
        ignored: Whether the source kind was unrecognized
    """
    source: str
    kind: Optional[EvidenceKind] = None
    applied: int = 0
    dropped: int = 0
    ignored: bool = False


def _resolve_kind(source: Any) -> Optional[EvidenceKind]:
    kind = getattr(source, "kind", None)
    if kind is None:
        return None
    try:
        return EvidenceKind(kind)
    except ValueError:
        return None


class CoverageAggregator:
    """
    Accumulates normalized evidence into sequence models.

    Dispatch is by ``EvidenceKind``; each kind has one fold method that
    returns ``(applied, dropped)`` counts.

    Example:
        >>> aggregator = CoverageAggregator()
        >>> report = aggregator.aggregate(model, PpdbSource(payload))
        >>> report.applied, report.dropped
        (12, 1)
    """

    def __init__(self):
        self._folds: dict[EvidenceKind, Callable[[SequenceModel, EvidenceBatch], tuple[int, int]]] = {
            EvidenceKind.GENERIC: self._fold_generic,
            EvidenceKind.PREDICTED: self._fold_predicted,
            EvidenceKind.VARIANT: self._fold_variants,
            EvidenceKind.MODIFICATION: self._fold_modifications,
            EvidenceKind.CONSERVATION: self._fold_conservation,
        }

    def aggregate(
        self,
        model: SequenceModel,
        source: Union[EvidenceSource, EvidenceBatch, Any],
    ) -> AggregationReport:
        """
        Fold one source's evidence into ``model``.

        Args:
            model: Model to update in place
            source: An evidence source, or an already-normalized batch

        Returns:
            AggregationReport describing what was applied and dropped
        """
        name = getattr(source, "name", None) or getattr(source, "source", None) or str(source)
        kind = _resolve_kind(source)

        if kind is None or kind not in self._folds:
            logger.warning(f"Ignoring source {name!r}: unrecognized evidence kind")
            model.ignored_sources.append(name)
            return AggregationReport(source=name, ignored=True)

        batch = source if isinstance(source, EvidenceBatch) else source.normalize()
        applied, dropped = self._folds[batch.kind](model, batch)
        dropped += batch.rejected

        model.record_dropped(name, dropped)
        if dropped:
            logger.warning(f"{name}: dropped {dropped} unresolved evidence item(s)")
        logger.info(f"{name}: aggregated {applied} {batch.kind.value} item(s)")

        return AggregationReport(source=name, kind=batch.kind, applied=applied, dropped=dropped)

    # -------------------------------------------------------------------------
    # Folds
    # -------------------------------------------------------------------------

    def _locate(self, model: SequenceModel, peptide: str, source: str) -> Optional[range]:
        start = model.find_peptide(peptide)
        if start < 0:
            logger.debug(f"{source}: peptide {peptide!r} not found in sequence")
            return None
        return range(start, start + len(peptide))

    def _fold_generic(self, model: SequenceModel, batch: EvidenceBatch) -> tuple[int, int]:
        applied = dropped = 0
        # Residues whose reader coverage this call already counted
        touched: set[int] = set()

        for hit in batch.peptides:
            span = self._locate(model, hit.sequence, batch.source)
            if span is None:
                dropped += 1
                continue

            model.peptide_total += hit.weight
            for i in span:
                residue = model.residues[i]
                residue.gator_coverage += hit.weight
                if i not in touched:
                    residue.reader_coverage += 1
                    touched.add(i)
            applied += 1

        return applied, dropped

    def _fold_predicted(self, model: SequenceModel, batch: EvidenceBatch) -> tuple[int, int]:
        applied = dropped = 0

        for hit in batch.peptides:
            span = self._locate(model, hit.sequence, batch.source)
            if span is None:
                dropped += 1
                continue

            model.predicted_total += 1
            for i in span:
                model.residues[i].predicted_coverage += 1
            applied += 1

        return applied, dropped

    def _fold_variants(self, model: SequenceModel, batch: EvidenceBatch) -> tuple[int, int]:
        applied = dropped = 0

        for position in batch.variants:
            index = position - 1
            if 0 <= index < model.sequence_length:
                model.residues[index].snp_coverage += 1
                applied += 1
            else:
                logger.debug(f"{batch.source}: variant position {position} outside sequence")
                dropped += 1

        return applied, dropped

    def _resolve_site(self, model: SequenceModel, site: ModificationSite, source: str) -> Optional[int]:
        if site.is_relative:
            start = model.find_peptide(site.peptide)
            if start < 0:
                logger.debug(f"{source}: modified peptide {site.peptide!r} not found in sequence")
                return None
            index = start + site.position - 1
        else:
            index = site.position - 1

        if not 0 <= index < model.sequence_length:
            logger.debug(f"{source}: modification site {index} outside sequence")
            return None
        return index

    def _fold_modifications(self, model: SequenceModel, batch: EvidenceBatch) -> tuple[int, int]:
        applied = dropped = 0

        for site in batch.modifications:
            index = self._resolve_site(model, site, batch.source)
            if index is None:
                dropped += 1
                continue
            model.confirmed_mods.append(
                ConfirmedModification(position=index, label=site.label, source=batch.source)
            )
            applied += 1

        return applied, dropped

    def _fold_conservation(self, model: SequenceModel, batch: EvidenceBatch) -> tuple[int, int]:
        length = model.sequence_length
        for i, value in enumerate(batch.conservation[:length]):
            model.residues[i].conservation = value

        applied = min(len(batch.conservation), length)
        return applied, len(batch.conservation) - applied
