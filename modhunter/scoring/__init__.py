"""
Abundance estimation and per-residue scoring.

The abundance pass must run before the scoring pass; both only overwrite
derived fields and can be re-run at any time.
"""

from .abundance import (
    BIN_MAP,
    MAX_ABUNDANCE_SCORE,
    AbundanceEstimate,
    AbundanceEstimator,
    abundance_score_from_density,
    detect_terminal_zones,
    peptide_density,
    terminal_zone_length,
)
from .calculator import ScoreCalculator, calculate_scores, terminal_mask
from .config import DEFAULT_CONFIG, ScoringConfig

__all__ = [
    "BIN_MAP",
    "MAX_ABUNDANCE_SCORE",
    "AbundanceEstimate",
    "AbundanceEstimator",
    "abundance_score_from_density",
    "detect_terminal_zones",
    "peptide_density",
    "terminal_zone_length",
    "ScoreCalculator",
    "calculate_scores",
    "terminal_mask",
    "ScoringConfig",
    "DEFAULT_CONFIG",
]
