# qres/core/risk_priority.py
"""
Risk prioritisation for FMEA failure modes.

Two encodings of AIAG-VDA action priority live here:

- ``action_priority``: the tiered decision procedure. This is the one the
  rest of the engine uses.
- ``aiag_vda_action_priority``: the static severity/occurrence/detection
  band matrix, kept for documentation and comparison.

The two do not agree on every rating triple; ``action_priority_discrepancies``
lists where they differ.
"""
import logging
from itertools import product
from typing import Iterable, List, Optional, Tuple

from .exceptions import InvalidRatingError
from .models import RPN_RISK_LEVELS
from .ratings import compute_rpn, validate_rating, RATING_MIN, RATING_MAX

logger = logging.getLogger(__name__)

# Severity band -> occurrence band -> detection band -> priority
AIAG_VDA_ACTION_PRIORITY_MATRIX = {
    'S9_S10': {
        'O1_O3': {'D1_D3': 'M', 'D4_D6': 'M', 'D7_D10': 'H'},
        'O4_O6': {'D1_D3': 'M', 'D4_D6': 'H', 'D7_D10': 'H'},
        'O7_O10': {'D1_D3': 'H', 'D4_D6': 'H', 'D7_D10': 'H'},
    },
    'S7_S8': {
        'O1_O3': {'D1_D3': 'L', 'D4_D6': 'M', 'D7_D10': 'M'},
        'O4_O6': {'D1_D3': 'M', 'D4_D6': 'M', 'D7_D10': 'H'},
        'O7_O10': {'D1_D3': 'M', 'D4_D6': 'H', 'D7_D10': 'H'},
    },
    'S4_S6': {
        'O1_O3': {'D1_D3': 'L', 'D4_D6': 'L', 'D7_D10': 'M'},
        'O4_O6': {'D1_D3': 'L', 'D4_D6': 'M', 'D7_D10': 'M'},
        'O7_O10': {'D1_D3': 'M', 'D4_D6': 'M', 'D7_D10': 'H'},
    },
    'S1_S3': {
        'O1_O3': {'D1_D3': 'L', 'D4_D6': 'L', 'D7_D10': 'L'},
        'O4_O6': {'D1_D3': 'L', 'D4_D6': 'L', 'D7_D10': 'M'},
        'O7_O10': {'D1_D3': 'L', 'D4_D6': 'M', 'D7_D10': 'M'},
    },
}


def rpn(severity, occurrence, detection) -> int:
    """Risk Priority Number for one failure mode. See ``compute_rpn``."""
    return compute_rpn(severity, occurrence, detection)


def risk_level(rpn_value: int) -> str:
    """
    Map an RPN to its risk band.

    Bands are closed on both ends and cover 1-1000 without gaps:
    LOW 1-40, MEDIUM 41-100, HIGH 101-200, VERY_HIGH 201-1000.

    Raises:
        ValueError: If the RPN lies outside 1-1000.
    """
    for name, low, high in RPN_RISK_LEVELS:
        if low <= rpn_value <= high:
            return name
    raise ValueError(f"RPN {rpn_value} is outside the valid range 1-1000")


def action_priority(severity, occurrence, detection, validate: bool = False) -> str:
    """
    Action Priority (H/M/L) via the tiered decision procedure.

    Tiers are evaluated by severity, highest first; the first matching tier
    decides. Total over the 1-10 rating cube.

    Args:
        severity, occurrence, detection: Ratings (1-10)
        validate: Raise InvalidRatingError for out-of-range ratings
            instead of classifying them as given.

    Returns:
        str: 'H', 'M' or 'L'
    """
    if validate:
        for name, value in (('severity', severity), ('occurrence', occurrence), ('detection', detection)):
            if not validate_rating(value):
                raise InvalidRatingError(f"Invalid {name} rating: {value!r}")

    s, o, d = severity, occurrence, detection

    if s >= 9:
        if o >= 7 or d >= 7:
            return 'H'
        if o >= 4 or d >= 4:
            return 'H'
        return 'M'

    if s >= 7:
        if o >= 7 and d >= 7:
            return 'H'
        if o >= 4 and d >= 7:
            return 'H'
        if o >= 7 and d >= 4:
            return 'H'
        if o >= 4 and d >= 4:
            return 'M'
        return 'L'

    if s >= 4:
        if o >= 7 and d >= 7:
            return 'H'
        if (o >= 4 and d >= 7) or (o >= 7 and d >= 4):
            return 'M'
        return 'L'

    if o >= 7 and d >= 7:
        return 'M'
    return 'L'


def _severity_band(severity) -> str:
    if severity >= 9:
        return 'S9_S10'
    if severity >= 7:
        return 'S7_S8'
    if severity >= 4:
        return 'S4_S6'
    return 'S1_S3'


def _rating_band(prefix: str, value) -> str:
    if value >= 7:
        return f'{prefix}7_{prefix}10'
    if value >= 4:
        return f'{prefix}4_{prefix}6'
    return f'{prefix}1_{prefix}3'


def aiag_vda_action_priority(severity, occurrence, detection) -> str:
    """Action Priority looked up in the static AIAG-VDA band matrix."""
    row = AIAG_VDA_ACTION_PRIORITY_MATRIX[_severity_band(severity)]
    return row[_rating_band('O', occurrence)][_rating_band('D', detection)]


def action_priority_discrepancies(
    ratings: Optional[Iterable[Tuple[int, int, int]]] = None
) -> List[Tuple[int, int, int, str, str]]:
    """
    Compare the tiered procedure with the band matrix.

    Args:
        ratings: (severity, occurrence, detection) triples to compare.
            Defaults to the full 10x10x10 rating cube.

    Returns:
        List of (s, o, d, tiered, matrix) for every triple where they disagree.
    """
    if ratings is None:
        scale = range(RATING_MIN, RATING_MAX + 1)
        ratings = product(scale, scale, scale)

    mismatches = []
    for s, o, d in ratings:
        tiered = action_priority(s, o, d)
        matrix = aiag_vda_action_priority(s, o, d)
        if tiered != matrix:
            mismatches.append((s, o, d, tiered, matrix))

    logger.debug(f"Action priority encodings disagree on {len(mismatches)} rating triples")
    return mismatches
