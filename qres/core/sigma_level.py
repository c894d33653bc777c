# qres/core/sigma_level.py
import logging

logger = logging.getLogger(__name__)

DPM_CEILING = 1_000_000

# (defects per million, sigma level), ascending by dpm.
# Short-term sigma including the conventional 1.5 sigma shift.
SIGMA_LEVELS = (
    (3.4, 6.0),
    (32, 5.0),
    (233, 4.5),
    (1350, 4.0),
    (6210, 3.5),
    (22750, 3.0),
    (66807, 2.5),
    (158655, 2.0),
    (308538, 1.5),
    (500000, 1.0),
)


def calculate_sigma_level(defects_per_million: float) -> float:
    """
    Convert defects per million opportunities to a six-sigma quality level.

    Step lookup, never interpolated: returns the sigma of the first table
    entry whose dpm threshold is >= the input.

    - dpm <= 0 returns 6.0
    - dpm >= 1,000,000 returns 0.0
    - dpm above the last threshold (500,000) returns 0.0
    """
    if defects_per_million <= 0:
        return 6.0
    if defects_per_million >= DPM_CEILING:
        return 0.0

    for dpm, sigma in SIGMA_LEVELS:
        if defects_per_million <= dpm:
            return sigma

    logger.debug(f"DPM {defects_per_million} beyond sigma table, using 0")
    return 0.0


def calculate_dpmo(defects: float, units: float, opportunities: float = 1) -> float:
    """Defects per million opportunities. Returns 0 when there are no opportunities."""
    total_opportunities = units * opportunities
    if total_opportunities <= 0:
        return 0.0
    return defects / total_opportunities * DPM_CEILING
