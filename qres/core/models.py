# qres/core/models.py
"""
Value objects returned by the core calculations.

Everything here is immutable: results are recomputed on demand and never
updated in place.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ControlLimits:
    """Control chart limits."""
    center_line: float
    ucl: float  # Upper Control Limit
    lcl: float  # Lower Control Limit


@dataclass(frozen=True)
class ConfidenceInterval:
    """Two-sided confidence interval around a sample mean."""
    lower: float
    upper: float


# (name, min_rpn, max_rpn), both ends inclusive
RPN_RISK_LEVELS = (
    ('LOW', 1, 40),
    ('MEDIUM', 41, 100),
    ('HIGH', 101, 200),
    ('VERY_HIGH', 201, 1000),
)
