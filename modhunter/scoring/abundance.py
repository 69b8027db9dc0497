"""
Protein abundance estimation and terminal processing detection.

Abundance is the density of observed peptides relative to the number of
tryptic peptides the protein could theoretically yield, discretized on a
log scale into a 0-99 score. For abundant proteins the coverage profile is
also searched for N- or C-terminal stretches that are never observed, which
suggests a cleaved signal peptide or propeptide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.models import SequenceModel
from .config import DEFAULT_CONFIG, ScoringConfig

logger = logging.getLogger(__name__)


# Log-scale abundance bin thresholds, BIN_MAP[i] == 2 ** (15 * i / 99)
BIN_MAP = np.array([
    1.0, 1.11073537957, 1.23373308343, 1.37035098472, 1.52209732116,
    1.69064734577, 1.87786182132, 2.08580756289, 2.31678025509, 2.57332979602,
    2.85828844775, 3.17480210394, 3.52636501998, 3.91685838898, 4.35059318942,
    4.83235777762, 5.36747075035, 5.96183966124, 6.62202623908, 7.3553188282,
    8.16981285052, 9.07450017756, 10.0793683992, 11.1955110847, 12.4352502542,
    13.8122724111, 15.3417796394, 17.040657431, 18.9276610998, 21.0236228361,
    23.3516816909, 25.9375390266, 28.8097422559, 32.0, 35.5435321463,
    39.4794586699, 43.851231511, 48.7071142772, 54.1007150645, 60.0915782823,
    66.7458420126, 74.1369681627, 82.3465534726, 91.4652303279, 101.593667326,
    112.843680639, 125.339468447, 139.218982061, 154.635448884, 171.759064011,
    190.77886916, 211.904839651, 235.370202503, 261.434011217, 290.384005682,
    322.539788773, 358.25635471, 397.928008133, 441.992717157, 490.936948459,
    545.301037793, 605.685155195, 672.755930757, 747.253814109, 830.001248851,
    921.911752189, 1024.0, 1137.39302868, 1263.34267744, 1403.23940835,
    1558.62765687, 1731.22288206, 1922.93050504, 2135.8669444, 2372.38298121,
    2635.08971112, 2926.88737049, 3250.99735443, 3610.99778046, 4010.86299032,
    4455.00742597, 4948.33436428, 5496.29004836, 6104.92381311, 6780.95486882,
    7531.84648008, 8365.88835894, 9292.28818183, 10321.2732407, 11464.2033507,
    12733.6962603, 14143.766949, 15709.9823507, 17449.6332094, 19381.9249662,
    21528.1897842, 23912.1220515, 26560.0399632, 29501.17607, 32768.0,
])
BIN_MAP.setflags(write=False)

MAX_ABUNDANCE_SCORE = len(BIN_MAP) - 1


def peptide_density(peptide_total: float, tryptic_total: int) -> float:
    """Observed peptides per theoretical tryptic peptide, in percent."""
    return (peptide_total / tryptic_total) * 100


def abundance_score_from_density(density: float) -> int:
    """
    Discretize a peptide density into a 0-99 abundance score.

    Returns the smallest bin index whose threshold is not below ``density``;
    densities beyond the last threshold saturate at 99.
    """
    index = int(np.searchsorted(BIN_MAP, density, side="left"))
    return min(index, MAX_ABUNDANCE_SCORE)


def terminal_zone_length(sequence_length: int, config: ScoringConfig = DEFAULT_CONFIG) -> float:
    """Upper bound (exclusive) on the length of a terminal processing zone."""
    if sequence_length > config.terminal_long_protein:
        return sequence_length * config.terminal_length_fraction
    return config.terminal_default_length


def _residues_to_fraction(coverage: np.ndarray, threshold: float) -> int:
    """Residues consumed from the start of ``coverage`` until its running sum reaches ``threshold``."""
    running = np.cumsum(coverage)
    return int(np.searchsorted(running, threshold, side="left")) + 1


def detect_terminal_zones(
    coverage: np.ndarray,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> tuple[Optional[int], Optional[int]]:
    """
    Find candidate N- and C-terminal processing boundaries.

    From each end, residues are consumed until they account for a fixed
    fraction of the protein's total coverage. A zone is reported when the
    consumed stretch is longer than a minimum fraction of the protein but
    shorter than the terminal zone length.

    Args:
        coverage: Per-residue experimental coverage
        config: Scoring parameters

    Returns:
        ``(n_terminal, c_terminal)``: the last residue index of the N-terminal
        zone and the first residue index of the C-terminal zone, each None
        when no zone is detected
    """
    length = len(coverage)
    total = float(coverage.sum())
    if length == 0 or total <= 0:
        return None, None

    threshold = total * config.terminal_coverage_fraction
    min_length = int(length * config.terminal_min_fraction)
    max_length = terminal_zone_length(length, config)

    n_terminal = c_terminal = None

    consumed = _residues_to_fraction(coverage, threshold)
    if min_length < consumed < max_length:
        n_terminal = consumed - 1

    consumed = _residues_to_fraction(coverage[::-1], threshold)
    if min_length < consumed < max_length:
        c_terminal = length - consumed

    return n_terminal, c_terminal


@dataclass
class AbundanceEstimate:
    """Result of one abundance pass."""
    density: float
    abundance_score: int
    n_terminal: Optional[int] = None
    c_terminal: Optional[int] = None


class AbundanceEstimator:
    """
    Derives the protein-level abundance score and terminal zones.

    The pass reads coverage totals and overwrites only derived fields, so it
    can be repeated at any point as evidence arrives.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def estimate(self, model: SequenceModel) -> AbundanceEstimate:
        """
        Update ``model.abundance_score`` and its terminal boundaries.

        Args:
            model: Model to update in place

        Returns:
            AbundanceEstimate with the values written to the model
        """
        density = peptide_density(model.peptide_total, model.tryptic_total)
        score = abundance_score_from_density(density)

        n_terminal = c_terminal = None
        if score >= self.config.terminal_min_abundance:
            n_terminal, c_terminal = detect_terminal_zones(
                model.coverage_array("gator_coverage"), self.config
            )

        model.abundance_score = score
        model.n_terminal = n_terminal
        model.c_terminal = c_terminal

        logger.debug(
            f"{model.sequence_id or 'sequence'}: density={density:.2f} "
            f"abundance={score} n_terminal={n_terminal} c_terminal={c_terminal}"
        )
        return AbundanceEstimate(density, score, n_terminal, c_terminal)
