# qres/core/capability.py
"""
Process capability (Cp, Cpk) and performance (Ppk) indices.

Cp/Cpk take an externally supplied short-term standard deviation; Ppk
derives the long-term sample standard deviation from the data itself.

A standard deviation <= 0 raises DivisionByZeroError. No index is ever
returned as NaN or infinity.
"""
import logging
from typing import Sequence

import numpy as np

from .control_limits import sample_std_dev
from .exceptions import DivisionByZeroError

logger = logging.getLogger(__name__)


def _check_std_dev(std_dev: float) -> None:
    if not std_dev > 0:
        raise DivisionByZeroError(
            f"Capability index undefined for standard deviation {std_dev}"
        )


def calculate_cp(std_dev: float, lower_spec: float, upper_spec: float) -> float:
    """Cp = (USL - LSL) / (6 * sigma)."""
    _check_std_dev(std_dev)
    return (upper_spec - lower_spec) / (6 * std_dev)


def calculate_cpk(mean: float, std_dev: float, lower_spec: float, upper_spec: float) -> float:
    """Cpk = min((USL - mean) / 3 sigma, (mean - LSL) / 3 sigma)."""
    _check_std_dev(std_dev)
    cpu = (upper_spec - mean) / (3 * std_dev)
    cpl = (mean - lower_spec) / (3 * std_dev)
    return min(cpu, cpl)


def calculate_ppk(data: Sequence[float], lower_spec: float, upper_spec: float) -> float:
    """
    Ppk from the sample mean and sample standard deviation (n-1) of ``data``.

    Raises:
        InsufficientDataError: If fewer than 2 readings are given.
        DivisionByZeroError: If all readings are identical.
    """
    values = np.asarray(data, dtype=np.float64).ravel()
    std_dev = sample_std_dev(values)
    mean = float(np.mean(values))
    logger.debug(f"Ppk on {len(values)} readings: mean={mean:.4f}, sigma={std_dev:.4f}")
    return calculate_cpk(mean, std_dev, lower_spec, upper_spec)
