# qres/core/control_limits.py
import math
import logging
from typing import List, Sequence

import numpy as np

from .exceptions import InsufficientDataError
from .models import ControlLimits

logger = logging.getLogger(__name__)

# d2 bias-correction constant for a moving range of two consecutive points
D2_MOVING_RANGE = 1.128


def _as_array(data: Sequence[float]) -> np.ndarray:
    return np.asarray(data, dtype=np.float64).ravel()


def moving_ranges(data: Sequence[float]) -> np.ndarray:
    """Absolute differences between consecutive readings."""
    return np.abs(np.diff(_as_array(data)))


def moving_range_std_dev(data: Sequence[float]) -> float:
    """
    Short-term standard deviation estimated from the mean moving range.

    Raises:
        InsufficientDataError: If fewer than 2 readings are given.
    """
    values = _as_array(data)
    if len(values) < 2:
        raise InsufficientDataError(
            f"Moving range needs at least 2 readings, got {len(values)}"
        )
    mean_range = float(np.mean(moving_ranges(values)))
    return mean_range / D2_MOVING_RANGE


def sample_std_dev(data: Sequence[float]) -> float:
    """
    Sample standard deviation (divisor n-1).

    Raises:
        InsufficientDataError: If fewer than 2 readings are given.
    """
    values = _as_array(data)
    if len(values) < 2:
        raise InsufficientDataError(
            f"Sample variance needs at least 2 readings, got {len(values)}"
        )
    return math.sqrt(float(np.var(values, ddof=1)))


def calculate_control_limits(data: Sequence[float], subgroup_size: int = 1) -> ControlLimits:
    """
    Calculate center line and 3-sigma control limits.

    Args:
        data: Individual readings, in production order.
        subgroup_size: 1 for an individuals/moving-range chart. Larger values
            keep all readings as individuals and only narrow the limits by
            sqrt(subgroup_size); the data itself is not split into subgroups.

    Returns:
        ControlLimits with center_line, ucl and lcl.

    Raises:
        InsufficientDataError: If fewer than 2 readings are given.
        ValueError: If subgroup_size is smaller than 1.
    """
    if subgroup_size < 1:
        raise ValueError(f"Subgroup size must be at least 1, got {subgroup_size}")

    values = _as_array(data)

    if subgroup_size == 1:
        std_dev = moving_range_std_dev(values)
        center_line = float(np.mean(values))
        spread = 3 * std_dev
    else:
        std_dev = sample_std_dev(values)
        center_line = float(np.mean(values))
        spread = 3 * std_dev / math.sqrt(subgroup_size)

    logger.debug(
        f"Control limits (n={len(values)}, subgroup={subgroup_size}): "
        f"CL={center_line:.4f}, sigma={std_dev:.4f}"
    )
    return ControlLimits(
        center_line=center_line,
        ucl=center_line + spread,
        lcl=center_line - spread,
    )


def find_out_of_control_points(data: Sequence[float], limits: ControlLimits) -> List[int]:
    """Indices of readings strictly above the UCL or below the LCL."""
    values = _as_array(data)
    mask = (values > limits.ucl) | (values < limits.lcl)
    return [int(i) for i in np.flatnonzero(mask)]
