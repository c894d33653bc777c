# qres/analysis/capability_analyzer.py
import logging
from typing import List, Optional, Sequence

import numpy as np

from ..core.capability import calculate_cp, calculate_cpk, calculate_ppk
from ..core.control_limits import (
    calculate_control_limits,
    find_out_of_control_points,
    moving_range_std_dev,
    sample_std_dev,
)
from ..core.exceptions import DivisionByZeroError, InsufficientDataError
from ..core.sigma_level import calculate_dpmo, calculate_sigma_level
from .models import CapabilityThresholds, DEFAULT_CAPABILITY_THRESHOLDS, CapabilityStudy

logger = logging.getLogger(__name__)


def classify_capability(
    index: Optional[float],
    thresholds: CapabilityThresholds = DEFAULT_CAPABILITY_THRESHOLDS,
) -> str:
    """
    Grade a capability index.

    Returns:
        'capable', 'marginal', 'not capable', or 'undetermined' when no
        index could be computed.
    """
    if index is None:
        return 'undetermined'
    if index >= thresholds.capable:
        return 'capable'
    elif index >= thresholds.marginal:
        return 'marginal'
    else:
        return 'not capable'


def _capability_warnings(
    verdict: str,
    cpk: Optional[float],
    out_of_control: List[int],
    out_of_spec: int,
) -> List[str]:
    warnings = []
    if out_of_control:
        warnings.append(f"{len(out_of_control)} readings outside control limits")
    if out_of_spec:
        warnings.append(f"{out_of_spec} readings outside specification limits")
    if verdict == 'not capable':
        warnings.append(f"Process not capable (Cpk={cpk:.3f})")
    elif verdict == 'marginal':
        warnings.append(f"Process marginally capable (Cpk={cpk:.3f})")
    return warnings


def run_capability_study(
    data: Sequence[float],
    lower_spec: float,
    upper_spec: float,
    thresholds: CapabilityThresholds = DEFAULT_CAPABILITY_THRESHOLDS,
) -> CapabilityStudy:
    """
    Capability study of one characteristic from individual readings.

    Combines an individuals control chart, Cp/Cpk from the short-term
    (moving range) sigma, Ppk from the overall sample sigma, observed DPMO
    and the matching sigma level.

    Args:
        data: Individual readings in production order
        lower_spec: Lower specification limit
        upper_spec: Upper specification limit
        thresholds: CapabilityThresholds configuration

    Returns:
        CapabilityStudy. Indices that are undefined because the readings
        show no variation are None and reported in ``warnings``.

    Raises:
        InsufficientDataError: If fewer than ``thresholds.min_samples``
            (and at least 2) readings are given.
    """
    values = np.asarray(data, dtype=np.float64).ravel()
    required = max(2, thresholds.min_samples)
    if len(values) < required:
        raise InsufficientDataError(
            f"Capability study needs at least {required} readings, got {len(values)}"
        )

    mean = float(np.mean(values))
    within_std = moving_range_std_dev(values)
    overall_std = sample_std_dev(values)
    limits = calculate_control_limits(values, subgroup_size=1)
    out_of_control = find_out_of_control_points(values, limits)

    warnings = []
    cp = cpk = ppk = None
    try:
        cp = calculate_cp(within_std, lower_spec, upper_spec)
        cpk = calculate_cpk(mean, within_std, lower_spec, upper_spec)
    except DivisionByZeroError as e:
        logger.warning(f"Within-subgroup capability undefined: {e}")
        warnings.append("No short-term variation, Cp/Cpk undefined")
    try:
        ppk = calculate_ppk(values, lower_spec, upper_spec)
    except DivisionByZeroError as e:
        logger.warning(f"Overall capability undefined: {e}")
        warnings.append("No overall variation, Ppk undefined")

    out_of_spec = int(np.count_nonzero((values < lower_spec) | (values > upper_spec)))
    dpmo = calculate_dpmo(out_of_spec, len(values))
    sigma = calculate_sigma_level(dpmo)
    verdict = classify_capability(cpk, thresholds)

    warnings.extend(_capability_warnings(verdict, cpk, out_of_control, out_of_spec))

    logger.info(
        f"Capability study (n={len(values)}): mean={mean:.4f}, "
        f"Cpk={'n/a' if cpk is None else f'{cpk:.3f}'}, "
        f"Ppk={'n/a' if ppk is None else f'{ppk:.3f}'}, "
        f"DPMO={dpmo:.0f}, sigma={sigma} -> {verdict}"
    )

    return CapabilityStudy(
        sample_size=len(values),
        mean=mean,
        within_std_dev=within_std,
        overall_std_dev=overall_std,
        control_limits=limits,
        out_of_control_points=out_of_control,
        cp=cp,
        cpk=cpk,
        ppk=ppk,
        dpmo=dpmo,
        sigma_level=sigma,
        verdict=verdict,
        warnings=warnings,
    )
