"""Correlate environmental history with symptom history.

Three factors are examined, each against the symptom it most plausibly
affects:

    pressure    day-over-day pressure change  vs  hot flash count
    humidity    humidity level                vs  sleep quality
    air quality PM2.5 level                   vs  mood

Each factor that passes its reporting gate becomes an EnvironmentalInsight
with a severity, fixed recommendations and a one-day outlook.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from hiec.domains.health.domain_logic.correlation import pearson_correlation
from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalFactor,
    EnvironmentalForecast,
    EnvironmentalInsight,
    EnvironmentalObservation,
    ForecastDirection,
    Severity,
    SymptomRecord,
)
from hiec.domains.health.domain_logic.numeric import (
    clamp,
    is_finite_number,
    mean_of,
    round_half_up,
)
from hiec.domains.health.domain_logic.thresholds import (
    AIR_QUALITY_HIGH_CORRELATION,
    AIR_QUALITY_MEDIUM_CORRELATION,
    AIR_QUALITY_REPORT_CORRELATION,
    HUMID_DAY_FRACTION,
    HUMID_DAY_PERCENT,
    HUMIDITY_HIGH_CORRELATION,
    HUMIDITY_MEDIUM_CORRELATION,
    HUMIDITY_REPORT_CORRELATION,
    MIN_ENVIRONMENT_PAIRS,
    PM25_ELEVATED,
    PM25_POOR,
    PRESSURE_HIGH_CORRELATION,
    PRESSURE_REPORT_CORRELATION,
)

logger = logging.getLogger(__name__)

Pair = tuple[SymptomRecord, EnvironmentalObservation]


# ---------------------------------------------------------------------------
# Recommendation and outlook tables
# ---------------------------------------------------------------------------

PRESSURE_RECOMMENDATIONS: dict[ForecastDirection, tuple[str, ...]] = {
    ForecastDirection.WORSE: (
        "Check the pressure forecast in your weather app",
        "When pressure is set to fall by more than 5 hPa, prepare for possible hot flashes",
        "Dress in layers on days with sharp pressure swings",
        "Practice breathing exercises when you feel weather-sensitive",
    ),
    ForecastDirection.BETTER: (
        "Notice whether rising pressure comes before your hot flashes",
        "Keep a pressure and symptom diary",
        "On high-pressure days avoid stress and caffeine",
    ),
    ForecastDirection.SAME: (
        "Keep tracking how the weather relates to your symptoms",
        "Keep a diary to reveal your personal patterns",
    ),
}

PRESSURE_OUTLOOK: dict[ForecastDirection, tuple[str, tuple[str, ...]]] = {
    ForecastDirection.WORSE: (
        "A pressure drop is expected",
        (
            "Pack a change of clothes",
            "Avoid hot drinks",
            "Plan some rest somewhere cool",
        ),
    ),
    ForecastDirection.BETTER: (
        "Pressure is stabilizing",
        ("Use the day for activity", "Plan important tasks"),
    ),
    ForecastDirection.SAME: (
        "Pressure changes are minor",
        ("Use the day for activity", "Plan important tasks"),
    ),
}

HUMIDITY_RECOMMENDATIONS: dict[Severity, tuple[str, ...]] = {
    Severity.HIGH: (
        "Run a dehumidifier in the bedroom",
        "Air out the room before bed",
        "Choose breathable bedding",
        "Skip hot showers before bed on humid days",
    ),
    Severity.MEDIUM: (
        "Air out the room before bed",
        "Choose breathable bedding",
        "Keep indoor humidity between 40 and 60%",
    ),
    Severity.LOW: (
        "Keep indoor humidity between 40 and 60%",
        "Keep an eye on the humidity forecast",
    ),
}

HUMIDITY_OUTLOOK: dict[Severity, tuple[ForecastDirection, str, tuple[str, ...]]] = {
    Severity.HIGH: (
        ForecastDirection.WORSE,
        "High humidity may disturb your sleep",
        (
            "Have the dehumidifier ready",
            "Pick light sleepwear",
            "Plan an earlier bedtime",
        ),
    ),
    Severity.MEDIUM: (
        ForecastDirection.WORSE,
        "Humidity may make your sleep lighter",
        ("Air out the bedroom", "Pick light sleepwear"),
    ),
    Severity.LOW: (
        ForecastDirection.SAME,
        "Humidity is not expected to have a noticeable effect",
        ("Keep your usual sleep routine", "Keep the bedroom at a comfortable temperature"),
    ),
}

AIR_QUALITY_RECOMMENDATIONS: dict[Severity, tuple[str, ...]] = {
    Severity.HIGH: (
        "Run an air purifier at home",
        "Limit time outdoors on poor air days",
        "Wear a protective mask outside",
        "Plan walks for the early morning",
    ),
    Severity.MEDIUM: (
        "Follow the air quality index",
        "Air out your home in the morning",
        "Avoid hard outdoor workouts on smoggy days",
    ),
    Severity.LOW: (
        "Keep monitoring air quality",
        "Stay active",
    ),
}

AIR_QUALITY_OUTLOOK: dict[Severity, tuple[ForecastDirection, str, tuple[str, ...]]] = {
    Severity.HIGH: (
        ForecastDirection.WORSE,
        "Poor air quality is expected",
        (
            "Minimize time outdoors",
            "Run the air purifier",
            "Plan indoor activities",
        ),
    ),
    Severity.MEDIUM: (
        ForecastDirection.SAME,
        "Air quality is acceptable",
        ("Use the day for a walk", "Plan outdoor activities"),
    ),
    Severity.LOW: (
        ForecastDirection.SAME,
        "Air quality is acceptable",
        ("Use the day for a walk", "Plan outdoor activities"),
    ),
}


# ---------------------------------------------------------------------------
# Pairing
# ---------------------------------------------------------------------------

def pair_by_date(
    records: Sequence[SymptomRecord],
    observations: Sequence[EnvironmentalObservation],
) -> list[Pair]:
    """Pair each record with the observation taken on the same calendar day.

    Record order is preserved; days without an observation are dropped. When
    several observations share a day, the last one wins.

    Equal-length sequences with no calendar day in common (snapshots stamped
    at fetch time, say) are taken as already index-aligned and zipped.
    """
    by_day = {obs.day: obs for obs in observations}
    pairs = [(record, by_day[record.date]) for record in records if record.date in by_day]
    if not pairs and records and len(records) == len(observations):
        logger.debug("No shared dates across %d days; pairing by index", len(records))
        return list(zip(records, observations))
    return pairs


def _series(
    pairs: Sequence[Pair],
    factor: Callable[[EnvironmentalObservation], float | None],
    symptom: Callable[[SymptomRecord], float],
) -> tuple[list[float], list[float]]:
    """Split pairs into (factor values, symptom values), skipping absent factors."""
    xs: list[float] = []
    ys: list[float] = []
    for record, obs in pairs:
        value = factor(obs)
        if is_finite_number(value):
            xs.append(float(value))
            ys.append(float(symptom(record)))
    return xs, ys


def _percent(value: float) -> int:
    return round_half_up(value * 100)


def _confidence(correlation: float) -> int:
    return int(clamp(_percent(abs(correlation))))


# ---------------------------------------------------------------------------
# Per-factor analysis
# ---------------------------------------------------------------------------

def analyze_pressure(pairs: Sequence[Pair]) -> EnvironmentalInsight | None:
    """Day-over-day pressure change against next-day hot flash count."""
    levels, flashes = _series(pairs, lambda o: o.pressure_hpa, lambda r: r.hot_flash_count)
    deltas = [b - a for a, b in zip(levels, levels[1:])]
    correlation = pearson_correlation(deltas, flashes[1:])

    if abs(correlation) <= PRESSURE_REPORT_CORRELATION:
        return None

    severity = Severity.HIGH if abs(correlation) > PRESSURE_HIGH_CORRELATION else Severity.MEDIUM
    # Pressure drops preceding more flares read as a worse outlook.
    if correlation < -PRESSURE_REPORT_CORRELATION:
        direction = ForecastDirection.WORSE
    elif correlation > PRESSURE_REPORT_CORRELATION:
        direction = ForecastDirection.BETTER
    else:
        direction = ForecastDirection.SAME

    reason, suggestions = PRESSURE_OUTLOOK[direction]
    sign = "positive" if correlation > 0 else "negative"
    return EnvironmentalInsight(
        factor=EnvironmentalFactor.PRESSURE,
        severity=severity,
        title="Atmospheric pressure effect",
        description=(
            f"A {sign} link was found between pressure changes and your hot flashes "
            f"(correlation: {_percent(correlation)}%)."
        ),
        correlation_coefficient=correlation,
        confidence_percent=_confidence(correlation),
        recommendations=PRESSURE_RECOMMENDATIONS[direction],
        forecast=EnvironmentalForecast(direction=direction, reason=reason, suggestions=suggestions),
    )


def analyze_humidity(pairs: Sequence[Pair]) -> EnvironmentalInsight | None:
    """Humidity level against sleep quality."""
    levels, sleep = _series(pairs, lambda o: o.humidity_percent, lambda r: r.sleep_quality)
    correlation = pearson_correlation(levels, sleep)

    if abs(correlation) <= HUMIDITY_REPORT_CORRELATION:
        return None

    humid_fraction = (
        sum(1 for h in levels if h > HUMID_DAY_PERCENT) / len(levels) if levels else 0.0
    )
    if humid_fraction > HUMID_DAY_FRACTION and correlation < -HUMIDITY_HIGH_CORRELATION:
        severity = Severity.HIGH
        description = (
            f"High humidity (on {_percent(humid_fraction)}% of days) noticeably worsens "
            f"your sleep. Correlation: {_percent(correlation)}%."
        )
    elif correlation < -HUMIDITY_MEDIUM_CORRELATION:
        severity = Severity.MEDIUM
        description = (
            f"Humidity has a moderate effect on your sleep quality. "
            f"Correlation: {_percent(correlation)}%."
        )
    else:
        severity = Severity.LOW
        description = (
            f"Humidity has little effect on your sleep. Correlation: {_percent(correlation)}%."
        )

    direction, reason, suggestions = HUMIDITY_OUTLOOK[severity]
    return EnvironmentalInsight(
        factor=EnvironmentalFactor.HUMIDITY,
        severity=severity,
        title="Humidity effect",
        description=description,
        correlation_coefficient=correlation,
        confidence_percent=_confidence(correlation),
        recommendations=HUMIDITY_RECOMMENDATIONS[severity],
        forecast=EnvironmentalForecast(direction=direction, reason=reason, suggestions=suggestions),
    )


def analyze_air_quality(pairs: Sequence[Pair]) -> EnvironmentalInsight | None:
    """PM2.5 level against mood.

    Reported when the link is statistically visible *or* the average level
    is objectively elevated.
    """
    levels, mood = _series(pairs, lambda o: o.pm25, lambda r: r.mood_overall)
    if not levels:
        return None

    correlation = pearson_correlation(levels, mood)
    mean_pm25 = mean_of(levels)

    has_impact = abs(correlation) > AIR_QUALITY_REPORT_CORRELATION or mean_pm25 > PM25_ELEVATED
    if not has_impact:
        return None

    shown_pm25 = round_half_up(mean_pm25)
    if correlation < -AIR_QUALITY_HIGH_CORRELATION and mean_pm25 > PM25_POOR:
        severity = Severity.HIGH
        description = (
            f"Poor air quality (PM2.5: {shown_pm25} μg/m³) noticeably affects your mood. "
            f"Correlation: {_percent(correlation)}%."
        )
    elif correlation < -AIR_QUALITY_MEDIUM_CORRELATION or mean_pm25 > PM25_ELEVATED:
        severity = Severity.MEDIUM
        description = (
            f"Air quality has a moderate effect on how you feel. "
            f"Average PM2.5: {shown_pm25} μg/m³."
        )
    else:
        severity = Severity.LOW
        description = f"Air quality in your area is acceptable. Average PM2.5: {shown_pm25} μg/m³."

    direction, reason, suggestions = AIR_QUALITY_OUTLOOK[severity]
    return EnvironmentalInsight(
        factor=EnvironmentalFactor.AIR_QUALITY,
        severity=severity,
        title="Air quality effect",
        description=description,
        correlation_coefficient=correlation,
        confidence_percent=_confidence(correlation),
        recommendations=AIR_QUALITY_RECOMMENDATIONS[severity],
        forecast=EnvironmentalForecast(direction=direction, reason=reason, suggestions=suggestions),
    )


def analyze_environmental_correlations(
    records: Sequence[SymptomRecord],
    observations: Sequence[EnvironmentalObservation],
) -> list[EnvironmentalInsight]:
    """Report which environmental factors track which symptoms.

    Args:
        records: Symptom records, oldest first.
        observations: Environmental observations for the same days.

    Returns:
        Insights in factor order (pressure, humidity, air quality); empty
        when fewer than five days can be paired.
    """
    pairs = pair_by_date(records, observations)
    if len(pairs) < MIN_ENVIRONMENT_PAIRS:
        logger.debug(
            "Environmental correlation needs %d paired days, got %d",
            MIN_ENVIRONMENT_PAIRS,
            len(pairs),
        )
        return []

    insights = []
    for analyze in (analyze_pressure, analyze_humidity, analyze_air_quality):
        insight = analyze(pairs)
        if insight is not None:
            insights.append(insight)
    return insights
