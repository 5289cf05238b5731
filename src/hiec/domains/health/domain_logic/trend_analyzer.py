"""Week-over-week symptom trend analysis from diary records.

Compares the most recent seven records with the seven before them for each
tracked symptom, classifies the shape of the recent week, and attaches
recommendations keyed by (symptom, direction).
"""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from typing import Callable, Sequence

from hiec.domains.health.domain_logic.insight_models import (
    SymptomCategory,
    SymptomRecord,
    SymptomTrend,
    TrendDirection,
    TrendShape,
)
from hiec.domains.health.domain_logic.numeric import mean_of, round_tenth
from hiec.domains.health.domain_logic.thresholds import (
    MIN_SHAPE_VALUES,
    MIN_TREND_RECORDS,
    VOLATILITY_VARIANCE,
    WEEK_LENGTH,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TrackedSymptom:
    category: SymptomCategory
    value: Callable[[SymptomRecord], float]
    higher_is_better: bool


TRACKED_SYMPTOMS: tuple[_TrackedSymptom, ...] = (
    _TrackedSymptom(SymptomCategory.HOT_FLASHES, lambda r: r.hot_flash_count, higher_is_better=False),
    _TrackedSymptom(SymptomCategory.SLEEP_QUALITY, lambda r: r.sleep_quality, higher_is_better=True),
)

TREND_RECOMMENDATIONS: dict[tuple[SymptomCategory, TrendDirection], tuple[str, ...]] = {
    (SymptomCategory.HOT_FLASHES, TrendDirection.WORSENING): (
        "Keep a hot flash trigger diary",
        "Avoid spicy food",
        "Practice slow, deep breathing when a flash starts",
        "See your doctor if hot flashes keep intensifying",
    ),
    (SymptomCategory.HOT_FLASHES, TrendDirection.IMPROVING): (
        "Keep up your current strategy",
        "Note what seems to be helping",
        "Share the progress with your doctor",
    ),
    (SymptomCategory.HOT_FLASHES, TrendDirection.STABLE): (
        "Watch for changes",
        "Keep tracking daily",
    ),
    (SymptomCategory.SLEEP_QUALITY, TrendDirection.WORSENING): (
        "Keep a regular sleep schedule",
        "Avoid caffeine in the evening",
        "Make the bedroom cool, dark and quiet",
        "Try a short meditation before bed",
    ),
    (SymptomCategory.SLEEP_QUALITY, TrendDirection.IMPROVING): (
        "Great progress!",
        "Keep your current habits",
        "Keep tracking daily",
    ),
    (SymptomCategory.SLEEP_QUALITY, TrendDirection.STABLE): (
        "Keep your routine steady",
        "Keep an eye on sleep quality",
    ),
}


def classify_shape(values: Sequence[float]) -> TrendShape:
    """Label the shape of a short daily series.

    Every step non-decreasing is a monotonic increase (a flat week included),
    every step non-increasing a monotonic decrease, and anything else is
    ``volatile`` or ``stable`` by variance.
    """
    if len(values) < MIN_SHAPE_VALUES:
        return TrendShape.INSUFFICIENT_DATA

    steps = list(zip(values, values[1:]))
    if all(b >= a for a, b in steps):
        return TrendShape.MONOTONIC_INCREASE
    if all(b <= a for a, b in steps):
        return TrendShape.MONOTONIC_DECREASE

    variance = statistics.pvariance(values)
    return TrendShape.VOLATILE if variance > VOLATILITY_VARIANCE else TrendShape.STABLE


def _direction(recent: float, previous: float, higher_is_better: bool) -> TrendDirection:
    if recent == previous:
        return TrendDirection.STABLE
    went_up = recent > previous
    return TrendDirection.IMPROVING if went_up == higher_is_better else TrendDirection.WORSENING


def compute_trends(records: Sequence[SymptomRecord]) -> list[SymptomTrend]:
    """Compute per-symptom week-over-week trends.

    Args:
        records: Symptom records, oldest first.

    Returns:
        One SymptomTrend per tracked symptom, or an empty list when fewer
        than two full weeks of records are available.
    """
    if len(records) < MIN_TREND_RECORDS:
        logger.debug(
            "Trend analysis needs %d records, got %d", MIN_TREND_RECORDS, len(records)
        )
        return []

    recent = records[-WEEK_LENGTH:]
    previous = records[-2 * WEEK_LENGTH:-WEEK_LENGTH]

    trends = []
    for tracked in TRACKED_SYMPTOMS:
        recent_values = [tracked.value(r) for r in recent]
        recent_mean = mean_of(recent_values)
        previous_mean = mean_of(tracked.value(r) for r in previous)
        direction = _direction(recent_mean, previous_mean, tracked.higher_is_better)

        trends.append(SymptomTrend(
            symptom=tracked.category,
            symptom_name=_display(tracked.category.value),
            current_week_average=round_tenth(recent_mean),
            previous_week_average=round_tenth(previous_mean),
            direction=direction,
            shape=classify_shape(recent_values),
            recommendations=TREND_RECOMMENDATIONS[(tracked.category, direction)],
        ))

    return trends


def _display(name: str) -> str:
    """Convert a snake_case name to display form."""
    return name.replace("_", " ").capitalize()
