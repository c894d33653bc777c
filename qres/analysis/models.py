# qres/analysis/models.py
"""
Data models for FMEA and capability analysis.

This module contains the threshold configuration and result dataclasses,
separating data structures from analysis logic.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.models import ControlLimits


@dataclass(frozen=True)
class FMEAThresholds:
    """
    Action thresholds for FMEA risk review.

    A rating at or above its threshold triggers the matching recommendation.
    """
    # Individual rating thresholds
    severity: int = 7
    occurrence: int = 4
    detection: int = 7

    # RPN category boundaries
    rpn: int = 100            # HIGH from here, action required
    critical_rpn: int = 300   # CRITICAL from here
    medium_rpn: int = 50      # MEDIUM from here

    # Detection ratings at or below this count as an effective control
    effective_detection_max: int = 3


@dataclass(frozen=True)
class CapabilityThresholds:
    """Capability index limits used to grade a process."""
    capable: float = 1.33
    marginal: float = 1.0
    min_samples: int = 2


DEFAULT_FMEA_THRESHOLDS = FMEAThresholds()
DEFAULT_CAPABILITY_THRESHOLDS = CapabilityThresholds()


@dataclass(frozen=True)
class RatingSet:
    """Effective ratings of one failure mode after roll-up."""
    severity: int
    occurrence: int
    detection: int
    rpn: int


@dataclass(frozen=True)
class RpnAnalysis:
    """Risk assessment of a single failure mode."""
    ratings: RatingSet
    risk_category: str      # LOW / MEDIUM / HIGH / CRITICAL
    risk_level: str         # RPN band, LOW / MEDIUM / HIGH / VERY_HIGH
    action_priority: str    # H / M / L
    requires_action: bool
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FMEAMetrics:
    """Summary statistics over all failure modes of one FMEA."""
    total_failure_modes: int
    average_rpn: int
    high_risk_items: int
    critical_items: int
    risk_distribution: Dict[str, int]


@dataclass(frozen=True)
class CapabilityStudy:
    """Result of a complete capability study on one characteristic."""
    sample_size: int
    mean: float
    within_std_dev: float
    overall_std_dev: float
    control_limits: ControlLimits
    out_of_control_points: List[int]
    cp: Optional[float]
    cpk: Optional[float]
    ppk: Optional[float]
    dpmo: float
    sigma_level: float
    verdict: str
    warnings: List[str] = field(default_factory=list)
