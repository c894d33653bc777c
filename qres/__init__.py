"""
QRES: Quality Risk Evaluation System.

Calculation engine for FMEA risk ratings and statistical process control.
"""

__version__ = "1.0.0"
