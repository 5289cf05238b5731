"""Rule-based insight generation and period analysis.

``generate_insights`` runs a fixed list of detectors over a record window;
each fires at most once and insights come back in detector order.
``analyze_period`` is the dashboard entry point: it filters the window and
bundles the health score, insights, trends and daily predictions.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable, Sequence

from hiec.domains.health.domain_logic.correlation import pearson_correlation
from hiec.domains.health.domain_logic.health_score import compute_health_score
from hiec.domains.health.domain_logic.insight_models import (
    AnalysisPeriod,
    DailyPrediction,
    HealthAnalysis,
    HealthTrend,
    Insight,
    InsightKind,
    Priority,
    SymptomCategory,
    SymptomRecord,
    UserProfile,
)
from hiec.domains.health.domain_logic.numeric import mean_of, round_half_up
from hiec.domains.health.domain_logic.thresholds import (
    DAILY_PREDICTION_CONFIDENCE,
    DAILY_PREDICTION_WINDOW,
    GOOD_MOOD,
    GOOD_WEEK_CONFIDENCE,
    GOOD_WEEK_MIN_DAYS,
    HOT_FLASH_DAY_FRACTION,
    HOT_FLASH_PATTERN_CONFIDENCE,
    MIN_DAILY_PREDICTION_RECORDS,
    MIN_MOOD_CORRELATION_RECORDS,
    MOOD_SYMPTOM_CONFIDENCE,
    MOOD_SYMPTOM_CORRELATION,
    PHASE_ADVICE_CONFIDENCE,
    POOR_SLEEP_MIN_DAYS,
    POOR_SLEEP_QUALITY,
    SLEEP_INSIGHT_CONFIDENCE,
    WEEK_LENGTH,
)
from hiec.domains.health.domain_logic.trend_analyzer import compute_trends

logger = logging.getLogger(__name__)

Detector = Callable[[Sequence[SymptomRecord], UserProfile, HealthTrend], "Insight | None"]


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

def _hot_flash_pattern(
    records: Sequence[SymptomRecord], profile: UserProfile, trend: HealthTrend
) -> Insight | None:
    if not records:
        return None
    flash_days = sum(1 for r in records if r.hot_flash_count > 0)
    if flash_days <= len(records) * HOT_FLASH_DAY_FRACTION:
        return None
    share = round_half_up(flash_days / len(records) * 100)
    return Insight(
        id="hot_flash_pattern",
        kind=InsightKind.PATTERN,
        priority=Priority.HIGH,
        title="Frequent hot flashes",
        description=(
            f"You had hot flashes on {share}% of days. "
            "That is above average for your menopause phase."
        ),
        confidence_percent=HOT_FLASH_PATTERN_CONFIDENCE,
        actions=(
            "Keep a hot flash trigger diary",
            "Avoid spicy food and caffeine",
            "Try breathing techniques",
            "Discuss treatment options with your doctor",
        ),
        trend=trend,
    )


def _sleep_quality(
    records: Sequence[SymptomRecord], profile: UserProfile, trend: HealthTrend
) -> Insight | None:
    poor_nights = sum(1 for r in records if r.sleep_quality <= POOR_SLEEP_QUALITY)
    if poor_nights <= POOR_SLEEP_MIN_DAYS:
        return None
    return Insight(
        id="sleep_quality",
        kind=InsightKind.CORRELATION,
        priority=Priority.HIGH,
        title="Sleep problems",
        description=(
            f"Sleep quality was low on {poor_nights} of {len(records)} days. "
            "Poor sleep can amplify other menopause symptoms."
        ),
        confidence_percent=SLEEP_INSIGHT_CONFIDENCE,
        actions=(
            "Keep a regular sleep schedule",
            "No screens for an hour before bed",
            "Try meditation before sleep",
            "Air out the bedroom",
        ),
    )


def _mood_symptom_correlation(
    records: Sequence[SymptomRecord], profile: UserProfile, trend: HealthTrend
) -> Insight | None:
    if len(records) < MIN_MOOD_CORRELATION_RECORDS:
        return None
    correlation = pearson_correlation(
        [r.mood_overall for r in records],
        [r.hot_flash_count for r in records],
    )
    if abs(correlation) <= MOOD_SYMPTOM_CORRELATION:
        return None
    return Insight(
        id="mood_symptom_correlation",
        kind=InsightKind.CORRELATION,
        priority=Priority.MEDIUM,
        title="Mood and symptoms are linked",
        description=(
            "There is a strong link between your mood and your hot flashes. "
            f"Correlation coefficient: {round_half_up(abs(correlation) * 100)}%."
        ),
        confidence_percent=MOOD_SYMPTOM_CONFIDENCE,
        actions=(
            "Practice stress management techniques",
            "Stay physically active",
            "Spend time with people close to you",
            "Talk to a psychologist if you need to",
        ),
    )


def _positive_week(
    records: Sequence[SymptomRecord], profile: UserProfile, trend: HealthTrend
) -> Insight | None:
    good_days = sum(1 for r in records[-WEEK_LENGTH:] if r.mood_overall >= GOOD_MOOD)
    if good_days < GOOD_WEEK_MIN_DAYS:
        return None
    return Insight(
        id="positive_trend",
        kind=InsightKind.ACHIEVEMENT,
        priority=Priority.LOW,
        title="A good week!",
        description=f"You felt good on {good_days} of the last 7 days. Great progress!",
        confidence_percent=GOOD_WEEK_CONFIDENCE,
        actions=(
            "Think about what helped",
            "Keep it up",
            "Share your success with the community",
        ),
        trend=trend,
    )


def _phase_advice(
    records: Sequence[SymptomRecord], profile: UserProfile, trend: HealthTrend
) -> Insight | None:
    if not profile.post_menopausal:
        return None
    return Insight(
        id="menopause_phase_advice",
        kind=InsightKind.RECOMMENDATION,
        priority=Priority.MEDIUM,
        title="Advice for your phase",
        description=(
            "You are post-menopausal. Pay particular attention to preventing "
            "osteoporosis and cardiovascular disease."
        ),
        confidence_percent=PHASE_ADVICE_CONFIDENCE,
        actions=(
            "Have regular bone density checks",
            "Increase calcium and vitamin D intake",
            "Do cardio training 3-4 times a week",
            "Ask your doctor whether hormone therapy is right for you",
        ),
    )


DETECTORS: tuple[Detector, ...] = (
    _hot_flash_pattern,
    _sleep_quality,
    _mood_symptom_correlation,
    _positive_week,
    _phase_advice,
)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def generate_insights(
    records: Sequence[SymptomRecord],
    profile: UserProfile | None = None,
) -> list[Insight]:
    """Run every detector over the window, in fixed order."""
    profile = profile or UserProfile()
    trend = compute_health_score(records).trend

    insights = []
    for detect in DETECTORS:
        insight = detect(records, profile, trend)
        if insight is not None:
            insights.append(insight)
    return insights


def generate_daily_predictions(records: Sequence[SymptomRecord]) -> list[DailyPrediction]:
    """Forecast tomorrow's hot flash count from the last three days."""
    if len(records) < MIN_DAILY_PREDICTION_RECORDS:
        return []
    expected = round_half_up(
        mean_of(r.hot_flash_count for r in records[-DAILY_PREDICTION_WINDOW:])
    )
    return [DailyPrediction(
        target=SymptomCategory.HOT_FLASHES,
        value=expected,
        confidence_percent=DAILY_PREDICTION_CONFIDENCE,
        description=f"Based on recent days, expect about {expected} hot flashes tomorrow.",
    )]


def filter_period(
    records: Sequence[SymptomRecord],
    period: AnalysisPeriod,
    today: date,
) -> list[SymptomRecord]:
    """Keep records dated on or after ``today`` minus the period length."""
    cutoff = today - timedelta(days=period.days)
    return [r for r in records if r.date >= cutoff]


def analyze_period(
    records: Sequence[SymptomRecord],
    profile: UserProfile | None,
    period: AnalysisPeriod,
    today: date,
) -> HealthAnalysis:
    """Full dashboard analysis for one period window.

    Args:
        records: All available symptom records, oldest first.
        profile: Onboarding profile; defaults to an empty profile.
        period: week, month or quarter.
        today: Reference date for the period cutoff.
    """
    window = filter_period(records, period, today)
    logger.debug("Analyzing %d of %d records for %s", len(window), len(records), period.value)

    return HealthAnalysis(
        health_score=compute_health_score(window),
        insights=tuple(generate_insights(window, profile)),
        trends=tuple(compute_trends(window)),
        predictions=tuple(generate_daily_predictions(window)),
    )
