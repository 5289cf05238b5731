"""Composite health score from a window of symptom diary records.

Four sub-scores (symptoms, sleep, mood, energy) on a 0-100 scale are averaged
into an overall score. The trend compares mean mood over the most recent
seven records with the seven before them.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hiec.domains.health.domain_logic.insight_models import (
    CategoryScores,
    HealthScore,
    HealthTrend,
    SymptomRecord,
)
from hiec.domains.health.domain_logic.numeric import clamp, mean_of, round_half_up
from hiec.domains.health.domain_logic.thresholds import (
    HOT_FLASH_SCORE_PENALTY,
    NEUTRAL_SCORE,
    SCALE_MAX,
    WEEK_LENGTH,
    WEEKLY_CHANGE_MULTIPLIER,
    WEEKLY_CHANGE_THRESHOLD,
)

logger = logging.getLogger(__name__)


def neutral_health_score() -> HealthScore:
    """Score shown when there is no diary data at all."""
    return HealthScore(
        overall=NEUTRAL_SCORE,
        categories=CategoryScores(
            symptoms=NEUTRAL_SCORE,
            sleep=NEUTRAL_SCORE,
            mood=NEUTRAL_SCORE,
            energy=NEUTRAL_SCORE,
        ),
        trend=HealthTrend.STABLE,
        weekly_change_points=0,
    )


def _score(value: float) -> int:
    return int(clamp(round_half_up(value)))


def weekly_mood_change(records: Sequence[SymptomRecord]) -> tuple[HealthTrend, int]:
    """Return (trend, signed points) for recent vs previous week mood.

    Stable with zero change when either window is empty.
    """
    recent = records[-WEEK_LENGTH:]
    previous = records[-2 * WEEK_LENGTH:-WEEK_LENGTH]
    if not recent or not previous:
        return HealthTrend.STABLE, 0

    recent_mood = mean_of(r.mood_overall for r in recent)
    previous_mood = mean_of(r.mood_overall for r in previous)
    change = round_half_up((recent_mood - previous_mood) * WEEKLY_CHANGE_MULTIPLIER)

    if change > WEEKLY_CHANGE_THRESHOLD:
        return HealthTrend.IMPROVING, change
    if change < -WEEKLY_CHANGE_THRESHOLD:
        return HealthTrend.DECLINING, change
    return HealthTrend.STABLE, change


def compute_health_score(records: Sequence[SymptomRecord]) -> HealthScore:
    """Reduce a chronological record window into a HealthScore.

    Args:
        records: Symptom records, oldest first.

    Returns:
        HealthScore with every score clamped to [0, 100]. An empty window
        yields the neutral default rather than an error.
    """
    if not records:
        logger.debug("No symptom records; returning neutral health score")
        return neutral_health_score()

    symptoms_score = max(0.0, 100 - HOT_FLASH_SCORE_PENALTY * mean_of(r.hot_flash_count for r in records))
    sleep_score = mean_of(r.sleep_quality for r in records) / SCALE_MAX * 100
    mood_score = mean_of(r.mood_overall for r in records) / SCALE_MAX * 100
    energy_score = mean_of(r.energy_level for r in records) / SCALE_MAX * 100

    overall = mean_of([symptoms_score, sleep_score, mood_score, energy_score])
    trend, change = weekly_mood_change(records)

    return HealthScore(
        overall=_score(overall),
        categories=CategoryScores(
            symptoms=_score(symptoms_score),
            sleep=_score(sleep_score),
            mood=_score(mood_score),
            energy=_score(energy_score),
        ),
        trend=trend,
        weekly_change_points=change,
    )
