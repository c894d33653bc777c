"""
Analysis package for QRES.

Combines the core calculations into FMEA risk assessments and process
capability studies.
"""
from .models import (
    FMEAThresholds,
    CapabilityThresholds,
    DEFAULT_FMEA_THRESHOLDS,
    DEFAULT_CAPABILITY_THRESHOLDS,
)
from .fmea_analyzer import analyze_rpn, calculate_fmea_metrics, rollup_ratings
from .capability_analyzer import run_capability_study

__all__ = [
    'FMEAThresholds',
    'CapabilityThresholds',
    'DEFAULT_FMEA_THRESHOLDS',
    'DEFAULT_CAPABILITY_THRESHOLDS',
    'analyze_rpn',
    'calculate_fmea_metrics',
    'rollup_ratings',
    'run_capability_study',
]
