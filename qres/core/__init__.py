"""
Core calculation routines for QRES.

Pure functions over ratings and measurement series: RPN and action
priority, control limits, capability indices, sigma level and
confidence intervals.
"""
from .exceptions import (
    QualityCalculationError,
    InvalidRatingError,
    InsufficientDataError,
    DivisionByZeroError,
)
from .models import ControlLimits, ConfidenceInterval
from .ratings import validate_rating, compute_rpn
from .risk_priority import (
    rpn,
    risk_level,
    action_priority,
    aiag_vda_action_priority,
    action_priority_discrepancies,
)
from .control_limits import calculate_control_limits, find_out_of_control_points
from .capability import calculate_cp, calculate_cpk, calculate_ppk
from .sigma_level import calculate_sigma_level, calculate_dpmo
from .confidence import calculate_confidence_interval, get_t_value
from .production_metrics import calculate_defect_rate, calculate_yield, calculate_oee

__all__ = [
    'QualityCalculationError',
    'InvalidRatingError',
    'InsufficientDataError',
    'DivisionByZeroError',
    'ControlLimits',
    'ConfidenceInterval',
    'validate_rating',
    'compute_rpn',
    'rpn',
    'risk_level',
    'action_priority',
    'aiag_vda_action_priority',
    'action_priority_discrepancies',
    'calculate_control_limits',
    'find_out_of_control_points',
    'calculate_cp',
    'calculate_cpk',
    'calculate_ppk',
    'calculate_sigma_level',
    'calculate_dpmo',
    'calculate_confidence_interval',
    'get_t_value',
    'calculate_defect_rate',
    'calculate_yield',
    'calculate_oee',
]
