"""
Core data models for Modhunter.

This module defines the per-protein accumulator that evidence sources are
folded into, together with the per-residue records and the provenance list
of confirmed modification sites. All models use Pydantic for validation and
serialization; the models are mutable because aggregation and scoring passes
update them in place.
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResidueRecord(BaseModel):
    """
    Evidence counters for a single sequence position.

    Counters only ever grow as evidence is aggregated; ``score`` is
    overwritten by every scoring pass.
    """
    residue: str = Field(..., min_length=1, max_length=1, description="Amino acid letter")

    gator_coverage: float = Field(0.0, ge=0, description="Weighted count of experimental peptides")
    predicted_coverage: int = Field(0, ge=0, description="Predicted-cleavage peptides covering the residue")
    reader_coverage: int = Field(0, ge=0, description="Distinct evidence sources covering the residue")
    snp_coverage: int = Field(0, ge=0, description="Nonsynonymous SNP events at the residue")
    conservation: Optional[Any] = Field(None, description="Orthology conservation value")

    score: int = Field(0, ge=0, le=100, description="Modification site score")

    @property
    def is_covered(self) -> bool:
        """Whether any experimental peptide covers this residue."""
        return self.gator_coverage > 0


class ConfirmedModification(BaseModel):
    """A residue a source asserts to carry a named modification."""
    position: int = Field(..., ge=0, description="0-indexed residue position")
    label: str = Field(..., description="Modification name, e.g. 'Phosphorylation'")
    source: Optional[str] = Field(None, description="Name of the reporting source")

    def as_tuple(self) -> tuple[int, str]:
        return self.position, self.label


class SequenceModel(BaseModel):
    """
    Per-residue data model for one protein sequence.

    Created once per sequence by ``modhunter.load``, mutated by each
    aggregation call and by every ``recompute`` pass. It holds no external
    resources and needs no teardown.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    whole_sequence: str = Field(..., min_length=1, frozen=True)
    sequence_id: Optional[str] = Field(None, description="Accession (AGI) of the protein")
    residues: list[ResidueRecord] = Field(default_factory=list)

    # Protein-level totals
    predicted_total: int = Field(0, ge=0)
    peptide_total: float = Field(0.0, ge=0)
    tryptic_total: int = Field(1, ge=1)

    # Derived by the abundance pass
    abundance_score: int = Field(0, ge=0, le=99)
    n_terminal: Optional[int] = None
    c_terminal: Optional[int] = None

    # Provenance
    confirmed_mods: list[ConfirmedModification] = Field(default_factory=list)
    dropped_evidence: dict[str, int] = Field(
        default_factory=dict, description="Unresolved evidence items per source"
    )
    ignored_sources: list[str] = Field(default_factory=list)

    @field_validator("residues")
    @classmethod
    def residues_match_sequence(cls, v: list[ResidueRecord], info) -> list[ResidueRecord]:
        if "whole_sequence" in info.data and len(v) != len(info.data["whole_sequence"]):
            raise ValueError(
                f"residues length ({len(v)}) must match sequence length "
                f"({len(info.data['whole_sequence'])})"
            )
        return v

    def __len__(self) -> int:
        return len(self.whole_sequence)

    @property
    def sequence_length(self) -> int:
        """Length of the protein sequence."""
        return len(self.whole_sequence)

    @property
    def scores(self) -> list[int]:
        """Per-residue scores in sequence order."""
        return [r.score for r in self.residues]

    @property
    def total_dropped(self) -> int:
        """Evidence items dropped across all sources."""
        return sum(self.dropped_evidence.values())

    def coverage_array(self, counter: str = "gator_coverage") -> np.ndarray:
        """
        Return one residue counter as a float array.

        Args:
            counter: ResidueRecord attribute name

        Returns:
            Array of length ``sequence_length``
        """
        if counter not in ResidueRecord.model_fields or counter in ("residue", "conservation"):
            raise ValueError(f"Unknown coverage counter: {counter}")
        return np.array([getattr(r, counter) for r in self.residues], dtype=float)

    def find_peptide(self, peptide: str) -> int:
        """0-based start of the first exact match of ``peptide``, or -1."""
        if not peptide:
            return -1
        return self.whole_sequence.find(peptide)

    def record_dropped(self, source: str, count: int = 1):
        """Count evidence items from ``source`` that could not be placed."""
        if count <= 0:
            return
        self.dropped_evidence[source] = self.dropped_evidence.get(source, 0) + count

    def in_terminal_zone(self, index: int) -> bool:
        """Whether a residue falls inside a detected N- or C-terminal processing zone."""
        if self.n_terminal is not None and index <= self.n_terminal:
            return True
        if self.c_terminal is not None and index >= self.c_terminal:
            return True
        return False

    def mods_at(self, index: int) -> list[str]:
        """Labels of confirmed modifications recorded at ``index``."""
        return [m.label for m in self.confirmed_mods if m.position == index]
