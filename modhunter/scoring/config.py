"""Scoring parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Constants of the abundance and per-residue scoring passes.

    Defaults reproduce the published Modhunter heuristic; overriding them
    is meant for sensitivity analysis, not for routine use.
    """
    # Per-residue terms
    coverage_saturation: float = 10.0  # Coverage at which observed evidence fully suppresses
    abundance_floor: int = 20  # Proteins at or below score 0
    abundance_span: int = 50  # Abundance range over which the score scales up
    gap_abundance_floor: int = 70  # Gaps are boosted only above this abundance
    gap_abundance_span: int = 30
    gap_coverage: float = 4.0  # Coverage below which a residue counts as a gap
    gap_weight: float = 0.7

    # Terminal processing zones
    terminal_min_abundance: int = 50
    terminal_coverage_fraction: float = 0.05
    terminal_min_fraction: float = 0.08  # Zone must be longer than this fraction of the protein
    terminal_length_fraction: float = 0.2
    terminal_long_protein: int = 200  # Proteins longer than this use the fractional zone limit
    terminal_default_length: int = 40
    terminal_boost: int = 60

    max_score: int = 100


DEFAULT_CONFIG = ScoringConfig()
