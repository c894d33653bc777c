# qres/core/ratings.py
import math
import logging
from numbers import Integral, Real

from .exceptions import InvalidRatingError

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 10


def validate_rating(value, min_value: int = RATING_MIN, max_value: int = RATING_MAX) -> bool:
    """
    Check that a rating is an integer within [min_value, max_value].

    Integral floats such as ``7.0`` are accepted; booleans, NaN and
    infinities are not. Never raises.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return bool(min_value <= value <= max_value)
    if isinstance(value, Real):
        value = float(value)
        if not math.isfinite(value) or not value.is_integer():
            return False
        return bool(min_value <= value <= max_value)
    return False


def compute_rpn(severity, occurrence, detection) -> int:
    """
    Calculates the Risk Priority Number (severity x occurrence x detection).

    Args:
        severity: Severity rating (1-10)
        occurrence: Occurrence rating (1-10)
        detection: Detection rating (1-10)

    Returns:
        int: RPN in the range 1-1000

    Raises:
        InvalidRatingError: If any rating is not an integer between 1 and 10.
    """
    for name, value in (('severity', severity), ('occurrence', occurrence), ('detection', detection)):
        if not validate_rating(value):
            raise InvalidRatingError(
                f"Invalid {name} rating: {value!r}. "
                f"All ratings must be integers between {RATING_MIN} and {RATING_MAX}."
            )
    return int(severity) * int(occurrence) * int(detection)
