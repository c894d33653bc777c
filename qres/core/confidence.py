# qres/core/confidence.py
import math
import logging

from .models import ConfidenceInterval

logger = logging.getLogger(__name__)

# Normal approximation used whenever the t-table has no answer
Z_FALLBACK = 1.96

# Two-sided Student t critical values, keyed by confidence % then degrees of freedom
T_TABLE = {
    95: {
        1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571,
        10: 2.228, 15: 2.131, 20: 2.086, 25: 2.060, 30: 2.042,
    },
    99: {
        1: 63.657, 2: 9.925, 3: 5.841, 4: 4.604, 5: 4.032,
        10: 3.169, 15: 2.947, 20: 2.845, 25: 2.787, 30: 2.750,
    },
}


def get_t_value(degrees_of_freedom: int, confidence_level: float) -> float:
    """
    Look up the critical t value.

    - Unsupported confidence level: 1.96.
    - Degrees of freedom tabulated: the table entry.
    - Otherwise the entry of the next larger tabulated df (no interpolation),
      or 1.96 when df exceeds the table.
    """
    if not math.isfinite(confidence_level):
        logger.debug(f"Confidence level {confidence_level} not finite, using {Z_FALLBACK}")
        return Z_FALLBACK

    confidence = int(math.floor(confidence_level * 100 + 0.5))
    table = T_TABLE.get(confidence)

    if table is None:
        logger.debug(f"No t-table for {confidence}% confidence, using {Z_FALLBACK}")
        return Z_FALLBACK

    if degrees_of_freedom in table:
        return table[degrees_of_freedom]

    for key in sorted(table):
        if degrees_of_freedom <= key:
            return table[key]

    logger.debug(f"df={degrees_of_freedom} beyond t-table, using {Z_FALLBACK}")
    return Z_FALLBACK


def calculate_confidence_interval(
    mean: float,
    std_dev: float,
    sample_size: int,
    confidence_level: float = 0.95,
) -> ConfidenceInterval:
    """
    Two-sided confidence interval for a sample mean.

    Args:
        mean: Sample mean
        std_dev: Sample standard deviation
        sample_size: Number of observations (df = sample_size - 1)
        confidence_level: 0.95 or 0.99 use the t-table; anything else
            uses the normal value 1.96.

    Returns:
        ConfidenceInterval. Never raises; a sample size <= 0 gives the
        unbounded interval (-inf, inf).
    """
    if sample_size <= 0:
        logger.debug(f"Sample size {sample_size} gives an unbounded interval")
        return ConfidenceInterval(lower=-math.inf, upper=math.inf)

    t_value = get_t_value(sample_size - 1, confidence_level)
    margin_of_error = t_value * (std_dev / math.sqrt(sample_size))

    return ConfidenceInterval(
        lower=mean - margin_of_error,
        upper=mean + margin_of_error,
    )
