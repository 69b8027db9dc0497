"""
Abstract base classes for evidence sources.

Every external evidence source (a proteomics database, a prediction service,
a variant catalogue) delivers results in its own shape. A source adapter
wraps one already-parsed result payload and normalizes it into an immutable
``EvidenceBatch`` of one of five kinds. The aggregator dispatches on the
batch kind only, so adding a source never requires touching the aggregator.

Implementation guide for new sources:
1. Inherit from the base class matching the evidence kind
   (``PeptideSource``, ``PredictedPeptideSource``, ``VariantSource``,
   ``ModificationSource`` or ``ConservationSource``)
2. Set class attributes (name, description, weight_rule or label)
3. Override the accessor the base class reads, if the payload shape differs
4. Decorate with ``@register_source``
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class EvidenceKind(str, Enum):
    """Behavior class of an evidence source."""

    GENERIC = "generic"  # Experimental peptides, counted into gator coverage
    PREDICTED = "predicted"  # Predicted proteotypic/cleavage peptides
    VARIANT = "variant"  # Nonsynonymous SNP positions
    MODIFICATION = "modification"  # Exact sites with a named modification
    CONSERVATION = "conservation"  # Index-aligned orthology conservation


class WeightMode(str, Enum):
    """How a peptide's count is read from its record."""
    NONE = "none"  # Every peptide counts once
    LENGTH = "length"  # Length of an array-valued field (e.g. spectra list)
    VALUE = "value"  # Integer value of a scalar field (e.g. spectral count)


@dataclass(frozen=True)
class WeightRule:
    """
    Weight extraction rule for peptide records.

    Attributes:
        field: Name of the field holding the count
        mode: How the field is interpreted
    """
    field: Optional[str] = None
    mode: WeightMode = WeightMode.NONE

    def weight(self, record: dict[str, Any]) -> float:
        """
        Weight of one peptide record.

        A missing field counts as 1. VALUE fields are truncated to an
        integer the way spectral counts are reported.

        Raises:
            ValueError: If the field cannot be read as a count, or the
                count is negative
        """
        if self.mode is WeightMode.NONE or not self.field:
            return 1
        value = record.get(self.field)
        if value is None:
            return 1
        try:
            if self.mode is WeightMode.LENGTH:
                count = len(value)
            else:
                count = int(float(value))
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Unreadable {self.field!r}: {value!r}") from e
        if count < 0:
            raise ValueError(f"Negative {self.field!r}: {value!r}")
        return count


def as_list(value: Any) -> list[Any]:
    """Payload field as a list; None is empty and a lone scalar becomes one item."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


NO_WEIGHT = WeightRule()


class SourceError(Exception):
    """Base exception for evidence source errors."""
    pass


class UnknownSourceError(SourceError, KeyError):
    """Raised when a source name is not registered."""
    pass


# =============================================================================
# Normalized evidence
# =============================================================================

class PeptideHit(BaseModel):
    """A peptide sub-sequence with its observation weight."""
    model_config = ConfigDict(frozen=True)

    sequence: str
    weight: float = Field(1, ge=0)


class ModificationSite(BaseModel):
    """
    A site asserted to carry a modification.

    Either ``peptide`` is set and ``position`` is a 1-based offset inside the
    peptide, or ``peptide`` is None and ``position`` is a 1-based position on
    the whole protein.
    """
    model_config = ConfigDict(frozen=True)

    position: int
    label: str
    peptide: Optional[str] = None

    @property
    def is_relative(self) -> bool:
        return self.peptide is not None


class EvidenceBatch(BaseModel):
    """
    Immutable snapshot of one source's normalized evidence.

    Only the field matching ``kind`` is populated. ``rejected`` counts
    records the adapter itself could not interpret (e.g. a non-numeric
    spectral count); they are reported as dropped evidence.
    """
    model_config = ConfigDict(frozen=True)

    source: str
    kind: EvidenceKind
    peptides: tuple[PeptideHit, ...] = ()
    variants: tuple[int, ...] = ()
    modifications: tuple[ModificationSite, ...] = ()
    conservation: tuple[Any, ...] = ()
    rejected: int = Field(0, ge=0)

    @property
    def size(self) -> int:
        """Number of evidence items in the batch."""
        return (
            len(self.peptides) + len(self.variants)
            + len(self.modifications) + len(self.conservation)
        )


# =============================================================================
# Source base classes
# =============================================================================

class EvidenceSource(ABC):
    """
    Abstract base class for all evidence sources.

    A source instance wraps the parsed payload of one completed lookup.
    Subclasses declare their kind as a class attribute and implement
    ``normalize``.
    """

    name: str = "EvidenceSource"
    kind: EvidenceKind = EvidenceKind.GENERIC
    description: str = ""

    def __init__(self, data: Optional[dict[str, Any]] = None, agi: Optional[str] = None):
        """
        Args:
            data: Parsed result payload (JSON object)
            agi: Accession the payload was retrieved for
        """
        self._raw_data = data or {}
        self.agi = agi
        self._rejected = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, agi={self.agi!r})"

    def __str__(self) -> str:
        return self.name

    @property
    def has_result(self) -> bool:
        """Whether the source carries any payload."""
        return bool(self._raw_data)

    @abstractmethod
    def normalize(self) -> EvidenceBatch:
        """Convert the payload into an immutable evidence batch."""
        pass

    def get_info(self) -> dict[str, Any]:
        """Source metadata for listings."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "description": self.description,
        }


class PeptideSource(EvidenceSource):
    """
    Source of experimentally observed peptides.

    Payloads carry a ``peptides`` list, either at the top level or under a
    ``data`` object, of records with at least a ``sequence`` key.
    """

    kind = EvidenceKind.GENERIC
    weight_rule: WeightRule = NO_WEIGHT

    def get_peptides(self) -> list[dict[str, Any]]:
        """Peptide records of the payload."""
        peptides = self._raw_data.get("peptides")
        if peptides is None and isinstance(self._raw_data.get("data"), dict):
            peptides = self._raw_data["data"].get("peptides")
        return as_list(peptides)

    def normalize(self) -> EvidenceBatch:
        hits = []
        rejected = 0
        for record in self.get_peptides():
            sequence = record.get("sequence") if isinstance(record, dict) else None
            if not sequence:
                rejected += 1
                continue
            try:
                hits.append(PeptideHit(sequence=sequence, weight=self.weight_rule.weight(record)))
            except (TypeError, ValueError, OverflowError) as e:
                logger.debug(f"{self.name}: skipping peptide {sequence!r}: {e}")
                rejected += 1
        return EvidenceBatch(
            source=self.name, kind=self.kind, peptides=tuple(hits), rejected=rejected
        )

    def get_info(self) -> dict[str, Any]:
        info = super().get_info()
        info["weight"] = (
            f"{self.weight_rule.mode.value}({self.weight_rule.field})"
            if self.weight_rule.field else "1"
        )
        return info


class PredictedPeptideSource(PeptideSource):
    """Source of predicted (proteotypic) peptides; weights are not used."""

    kind = EvidenceKind.PREDICTED


class SnpPayloadMixin:
    """
    Accessors for ``{"snps": {accession: [[position, from, to], ...]}}``
    payloads. Entries that are not lists come back as empty tuples.
    """

    def _snp_table(self) -> dict[str, Any]:
        table = self._raw_data.get("snps")
        return table if isinstance(table, dict) else {}

    def get_accessions(self) -> list[str]:
        return list(self._snp_table().keys())

    def get_snp(self, accession: str) -> list[tuple]:
        return [
            tuple(s) if isinstance(s, (list, tuple)) else ()
            for s in as_list(self._snp_table().get(accession))
        ]


class VariantSource(SnpPayloadMixin, EvidenceSource):
    """
    Source of nonsynonymous single-nucleotide variants with 1-based
    protein positions.
    """

    kind = EvidenceKind.VARIANT

    def normalize(self) -> EvidenceBatch:
        positions = []
        rejected = 0
        for accession in self.get_accessions():
            for snp in self.get_snp(accession):
                try:
                    positions.append(int(snp[0]))
                except (IndexError, TypeError, ValueError, OverflowError):
                    rejected += 1
        return EvidenceBatch(
            source=self.name, kind=self.kind, variants=tuple(positions), rejected=rejected
        )


class ModificationSource(EvidenceSource):
    """
    Source of experimentally confirmed modification sites.

    Subclasses set ``label`` and implement ``get_modifications``.
    """

    kind = EvidenceKind.MODIFICATION
    label: str = "Modification"

    @abstractmethod
    def get_modifications(self) -> list[ModificationSite]:
        """Sites reported by the payload."""
        pass

    def normalize(self) -> EvidenceBatch:
        self._rejected = 0
        sites = tuple(self.get_modifications())
        return EvidenceBatch(
            source=self.name, kind=self.kind, modifications=sites, rejected=self._rejected
        )

    def get_info(self) -> dict[str, Any]:
        info = super().get_info()
        info["label"] = self.label
        return info


class ConservationSource(EvidenceSource):
    """
    Source of per-residue conservation values, index-aligned to the sequence.

    Payload: ``{"conservation": [value, ...]}``
    """

    kind = EvidenceKind.CONSERVATION

    def get_conservation(self) -> list[Any]:
        return as_list(self._raw_data.get("conservation"))

    def normalize(self) -> EvidenceBatch:
        return EvidenceBatch(
            source=self.name, kind=self.kind, conservation=tuple(self.get_conservation())
        )


# Registry for available sources
_SOURCE_REGISTRY: dict[str, type[EvidenceSource]] = {}


def register_source(source_class: type[EvidenceSource]) -> type[EvidenceSource]:
    """
    Decorator to register a source class under its ``name``.

    Usage:
        @register_source
        class MySource(PeptideSource):
            name = "mysource"
            ...
    """
    _SOURCE_REGISTRY[source_class.name] = source_class
    return source_class


def get_source(
    name: str,
    data: Optional[dict[str, Any]] = None,
    agi: Optional[str] = None,
) -> EvidenceSource:
    """
    Get a source instance wrapping ``data`` by registered name.

    Raises:
        UnknownSourceError: If the name is not registered
    """
    if name not in _SOURCE_REGISTRY:
        available = ", ".join(sorted(_SOURCE_REGISTRY))
        raise UnknownSourceError(f"Source '{name}' not found. Available: {available}")
    return _SOURCE_REGISTRY[name](data, agi=agi)


def list_sources() -> list[dict[str, Any]]:
    """Info dictionaries for all registered sources, sorted by name."""
    return [
        _SOURCE_REGISTRY[name]().get_info()
        for name in sorted(_SOURCE_REGISTRY)
    ]
