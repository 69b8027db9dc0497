"""
Per-residue modification site scoring.

The Modhunter score ranks residues by how likely they are to carry a
modification that proteomics has not yet reported. It is a heuristic, not a
calibrated probability:

- Observed coverage suppresses the score: a residue seen unmodified in many
  independent peptides is unlikely to hide a modification.
- A predicted proteotypic peptide over the residue raises it: the region
  should be observable, so its absence from the data is informative.
- Protein abundance scales everything: for scarce proteins missing coverage
  says nothing, and for very abundant proteins uncovered stretches get an
  extra boost.
- Residues inside a detected N- or C-terminal processing zone get a fixed
  boost.

Contracts: scores are integers in [0, 100], non-increasing in coverage with
everything else fixed, and 0 for proteins whose abundance score is at or
below the abundance floor.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..core.models import SequenceModel
from .config import DEFAULT_CONFIG, ScoringConfig

logger = logging.getLogger(__name__)


def _ramp(value: float, floor: float, span: float) -> float:
    """Linear 0-1 ramp starting at ``floor`` over ``span``."""
    return min(max(value - floor, 0) / span, 1.0)


def calculate_scores(
    gator_coverage: np.ndarray,
    predicted_coverage: np.ndarray,
    abundance_score: int,
    terminal_mask: Optional[np.ndarray] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Compute Modhunter scores for a coverage profile.

    Args:
        gator_coverage: Weighted experimental coverage per residue
        predicted_coverage: Predicted peptide coverage per residue
        abundance_score: Protein abundance score (0-99)
        terminal_mask: Boolean array marking residues in terminal zones
        config: Scoring parameters

    Returns:
        Integer array of scores in [0, 100]
    """
    gator = np.asarray(gator_coverage, dtype=float)
    predicted = np.asarray(predicted_coverage, dtype=float)

    gat_score = np.minimum(gator / config.coverage_saturation, 1.0)
    pred_score = (predicted > 0).astype(float)
    ab_scale = _ramp(abundance_score, config.abundance_floor, config.abundance_span)
    gap_scale = (
        _ramp(abundance_score, config.gap_abundance_floor, config.gap_abundance_span)
        * np.maximum((config.gap_coverage - gator) / config.gap_coverage, 0.0)
        * config.gap_weight
    )

    raw = np.clip(pred_score - gat_score + gap_scale, 0.0, 1.0) * ab_scale * config.max_score
    # Round half up
    scores = np.floor(raw + 0.5).astype(int)

    if terminal_mask is not None:
        boosted = np.minimum(scores + config.terminal_boost, config.max_score)
        scores = np.where(terminal_mask, boosted, scores)

    return scores


def terminal_mask(model: SequenceModel) -> np.ndarray:
    """Boolean mask of residues inside the model's terminal processing zones."""
    index = np.arange(model.sequence_length)
    mask = np.zeros(model.sequence_length, dtype=bool)
    if model.n_terminal is not None:
        mask |= index <= model.n_terminal
    if model.c_terminal is not None:
        mask |= index >= model.c_terminal
    return mask


class ScoreCalculator:
    """
    Writes per-residue scores onto a model.

    Depends on the abundance pass having run; ``modhunter.recompute`` runs
    both in order.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def score(self, model: SequenceModel) -> list[int]:
        """
        Recalculate and store the score of every residue.

        Args:
            model: Model to update in place

        Returns:
            List of scores in sequence order
        """
        scores = calculate_scores(
            model.coverage_array("gator_coverage"),
            model.coverage_array("predicted_coverage"),
            model.abundance_score,
            terminal_mask(model),
            self.config,
        )
        for residue, value in zip(model.residues, scores):
            residue.score = int(value)

        logger.debug(
            f"{model.sequence_id or 'sequence'}: scored {len(scores)} residues, "
            f"max={int(scores.max()) if len(scores) else 0}"
        )
        return [int(v) for v in scores]
