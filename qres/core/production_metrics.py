# qres/core/production_metrics.py
"""Shop-floor ratios reported next to the capability figures."""


def calculate_defect_rate(defects: float, total: float) -> float:
    """Defective share in percent; 0 when nothing was produced."""
    return (defects / total) * 100 if total > 0 else 0.0


def calculate_yield(good_parts: float, total_parts: float) -> float:
    """First-pass yield in percent; 0 when nothing was produced."""
    return (good_parts / total_parts) * 100 if total_parts > 0 else 0.0


def calculate_oee(availability: float, performance: float, quality: float) -> float:
    """
    Overall Equipment Effectiveness.

    All three factors and the result are percentages (0-100).
    """
    return (availability * performance * quality) / 10000
