# qres/analysis/fmea_analyzer.py
import math
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..core.exceptions import InvalidRatingError
from ..core.ratings import compute_rpn, validate_rating
from ..core.risk_priority import action_priority, risk_level
from ..services.logging_config import get_item_logger
from .models import (
    FMEAThresholds,
    DEFAULT_FMEA_THRESHOLDS,
    RatingSet,
    RpnAnalysis,
    FMEAMetrics,
)

logger = logging.getLogger(__name__)

# Worst-case detection when a cause has no detection control at all
NO_CONTROL_DETECTION = 10
# Occurrence assumed when a failure mode has no recorded cause
NO_CAUSE_OCCURRENCE = 1
# Relative change (percent) below which a trend counts as stable
TREND_STABLE_PCT = 5.0


def validate_rating_set(severity, occurrence, detection, item_id: str = "item") -> List[str]:
    """
    Validate the three ratings of a failure mode.

    Args:
        severity, occurrence, detection: Ratings to check
        item_id: Identifier used in the messages

    Returns:
        List of validation error messages (empty if all valid)
    """
    issues = []
    for name, value in (('severity', severity), ('occurrence', occurrence), ('detection', detection)):
        if not validate_rating(value):
            issues.append(f"{item_id}: Invalid {name}={value!r} (must be an integer 1-10)")
    return issues


def rollup_ratings(
    severity: int,
    occurrence_ratings: Sequence[int] = (),
    detection_ratings: Sequence[int] = (),
    item_id: str = "item",
) -> RatingSet:
    """
    Reduce the ratings of a failure mode's causes and controls to one set.

    The worst cause drives occurrence and the weakest detection control
    drives detection. A failure mode without causes gets occurrence 1; one
    without detection controls gets detection 10.

    Raises:
        InvalidRatingError: If any contributing rating is invalid.
    """
    issues = []
    if not validate_rating(severity):
        issues.append(f"{item_id}: Invalid severity={severity!r} (must be an integer 1-10)")
    for value in occurrence_ratings:
        if not validate_rating(value):
            issues.append(f"{item_id}: Invalid cause occurrence={value!r} (must be an integer 1-10)")
    for value in detection_ratings:
        if not validate_rating(value):
            issues.append(f"{item_id}: Invalid control detection={value!r} (must be an integer 1-10)")
    if issues:
        for issue in issues:
            logger.warning(issue)
        raise InvalidRatingError("; ".join(issues))

    occurrence = max(occurrence_ratings) if len(occurrence_ratings) else NO_CAUSE_OCCURRENCE
    detection = max(detection_ratings) if len(detection_ratings) else NO_CONTROL_DETECTION

    return RatingSet(
        severity=int(severity),
        occurrence=int(occurrence),
        detection=int(detection),
        rpn=compute_rpn(severity, occurrence, detection),
    )


def classify_rpn(rpn: int, thresholds: FMEAThresholds = DEFAULT_FMEA_THRESHOLDS) -> str:
    """
    Assign a review category to an RPN.

    Returns:
        'CRITICAL', 'HIGH', 'MEDIUM' or 'LOW'
    """
    if rpn >= thresholds.critical_rpn:
        return 'CRITICAL'
    elif rpn >= thresholds.rpn:
        return 'HIGH'
    elif rpn >= thresholds.medium_rpn:
        return 'MEDIUM'
    else:
        return 'LOW'


def _recommendations(ratings: RatingSet, category: str, thresholds: FMEAThresholds) -> List[str]:
    recommendations = []

    if category == 'CRITICAL':
        recommendations.append('Immediate action required - stop production if necessary')
        recommendations.append('Implement emergency controls')
        recommendations.append('Escalate to management')
    elif category == 'HIGH':
        recommendations.append('Action required - develop corrective action plan')
        recommendations.append('Target completion within 30 days')
    elif category == 'MEDIUM':
        recommendations.append('Consider preventive actions')
        recommendations.append('Monitor closely')
    else:
        recommendations.append('Continue current controls')

    if ratings.severity >= thresholds.severity:
        recommendations.append('Focus on reducing severity through design changes')
    if ratings.occurrence >= thresholds.occurrence:
        recommendations.append('Implement prevention controls to reduce occurrence')
    if ratings.detection >= thresholds.detection:
        recommendations.append('Improve detection methods and early warning systems')

    return recommendations


def analyze_rpn(
    severity,
    occurrence,
    detection,
    thresholds: FMEAThresholds = DEFAULT_FMEA_THRESHOLDS,
    item_id: Optional[str] = None,
) -> RpnAnalysis:
    """
    Full risk assessment of one failure mode.

    Args:
        severity, occurrence, detection: Effective ratings (1-10)
        thresholds: FMEAThresholds configuration
        item_id: Optional failure mode identifier, added to log records

    Returns:
        RpnAnalysis with category, RPN band, action priority and
        recommendations.

    Raises:
        InvalidRatingError: If any rating is invalid.
    """
    item_logger = get_item_logger(item_id or "item")

    issues = validate_rating_set(severity, occurrence, detection, item_id or "item")
    if issues:
        for issue in issues:
            item_logger.warning(issue)
        raise InvalidRatingError("; ".join(issues))

    ratings = RatingSet(
        severity=int(severity),
        occurrence=int(occurrence),
        detection=int(detection),
        rpn=compute_rpn(severity, occurrence, detection),
    )
    category = classify_rpn(ratings.rpn, thresholds)
    priority = action_priority(ratings.severity, ratings.occurrence, ratings.detection)

    item_logger.debug(
        f"S={ratings.severity} O={ratings.occurrence} D={ratings.detection} -> "
        f"RPN={ratings.rpn} ({category}), AP={priority}"
    )

    return RpnAnalysis(
        ratings=ratings,
        risk_category=category,
        risk_level=risk_level(ratings.rpn),
        action_priority=priority,
        requires_action=ratings.rpn >= thresholds.rpn,
        recommendations=_recommendations(ratings, category, thresholds),
    )


def calculate_fmea_metrics(
    rating_sets: Iterable[RatingSet],
    thresholds: FMEAThresholds = DEFAULT_FMEA_THRESHOLDS,
) -> FMEAMetrics:
    """
    Aggregate statistics over the failure modes of one FMEA.

    Critical items also count as high-risk items. The average RPN is
    rounded half up; an empty FMEA averages 0.
    """
    distribution = {'low': 0, 'medium': 0, 'high': 0, 'critical': 0}
    rpns = []
    critical_items = 0
    high_risk_items = 0

    for ratings in rating_sets:
        rpns.append(ratings.rpn)
        category = classify_rpn(ratings.rpn, thresholds)
        distribution[category.lower()] += 1
        if category == 'CRITICAL':
            critical_items += 1
            high_risk_items += 1
        elif category == 'HIGH':
            high_risk_items += 1

    average_rpn = int(math.floor(float(np.mean(rpns)) + 0.5)) if rpns else 0

    logger.info(
        f"FMEA metrics: {len(rpns)} failure modes, average RPN {average_rpn}, "
        f"{high_risk_items} high risk ({critical_items} critical)"
    )

    return FMEAMetrics(
        total_failure_modes=len(rpns),
        average_rpn=average_rpn,
        high_risk_items=high_risk_items,
        critical_items=critical_items,
        risk_distribution=distribution,
    )


def calculate_control_effectiveness(
    detection_ratings: Sequence[int],
    thresholds: FMEAThresholds = DEFAULT_FMEA_THRESHOLDS,
) -> float:
    """Percentage of detection controls rated at or below ``effective_detection_max``."""
    if not len(detection_ratings):
        return 0.0
    effective = sum(1 for d in detection_ratings if d <= thresholds.effective_detection_max)
    return effective / len(detection_ratings) * 100


def calculate_trend(values: Sequence[float]) -> Tuple[str, float]:
    """
    Classify the direction of a risk metric series.

    Compares the mean of the second half against the first half. Lower is
    better for risk metrics.

    Returns:
        (trend, change_pct) with trend 'IMPROVING', 'STABLE' or 'WORSENING'
        and the absolute percentage change.
    """
    if len(values) < 2:
        return 'STABLE', 0.0

    series = np.asarray(values, dtype=np.float64)
    half = len(series) // 2
    first_avg = float(np.mean(series[:half]))
    second_avg = float(np.mean(series[half:]))

    change_pct = (second_avg - first_avg) / first_avg * 100 if first_avg != 0 else 0.0

    if abs(change_pct) < TREND_STABLE_PCT:
        trend = 'STABLE'
    elif change_pct < 0:
        trend = 'IMPROVING'
    else:
        trend = 'WORSENING'

    return trend, abs(change_pct)
