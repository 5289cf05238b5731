"""Next-day symptom likelihoods from recent history and tomorrow's forecast.

Base risks come from the last week of diary averages; the forecast then adds
fixed bonuses for low pressure, humidity extremes and heat. Every adjustment
is named in the rationale text.
"""

from __future__ import annotations

import logging
from typing import Sequence

from hiec.domains.health.domain_logic.health_score import weekly_mood_change
from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalObservation,
    HealthTrend,
    PredictionResult,
    SymptomCategory,
    SymptomLikelihood,
    SymptomRecord,
)
from hiec.domains.health.domain_logic.numeric import (
    clamp,
    is_finite_number,
    mean_of,
    round_half_up,
)
from hiec.domains.health.domain_logic.thresholds import (
    HEADACHE_BASELINE_RISK,
    HIGH_HUMIDITY_PERCENT,
    HIGH_HUMIDITY_SLEEP_BONUS,
    HIGH_TEMPERATURE_C,
    HIGH_TEMPERATURE_HOT_FLASH_BONUS,
    HOT_FLASH_RISK_SCALE,
    LOW_HUMIDITY_HOT_FLASH_BONUS,
    LOW_HUMIDITY_PERCENT,
    LOW_PRESSURE_HEADACHE_BONUS,
    LOW_PRESSURE_HOT_FLASH_BONUS,
    LOW_PRESSURE_HPA,
    MIN_PREDICTION_RECORDS,
    NEUTRAL_LIKELIHOOD,
    NEUTRAL_PREDICTION_CONFIDENCE,
    PREDICTED_HOT_FLASH_OFFSET,
    PREDICTED_SCALE_SPREAD,
    PREDICTION_CONFIDENCE_BASE,
    PREDICTION_CONFIDENCE_CAP,
    PREDICTION_CONFIDENCE_PER_RECORD,
    PREPARATION_RISK,
    SCALE_MAX,
    WEEK_LENGTH,
)

logger = logging.getLogger(__name__)

PREPARATION_TIPS: dict[SymptomCategory, tuple[str, ...]] = {
    SymptomCategory.HOT_FLASHES: (
        "Dress in layers",
        "Keep a fan or other cooling aid at hand",
    ),
    SymptomCategory.SLEEP_QUALITY: (
        "Make sure the bedroom is well ventilated",
        "Avoid caffeine in the afternoon",
    ),
    SymptomCategory.MOOD: (
        "Plan something you enjoy",
        "Practice a relaxation technique",
    ),
}

FAVORABLE_TIP = "Weather conditions look favorable - make the most of the day!"
INSUFFICIENT_DATA_REASON = "Not enough data for an accurate forecast"
INSUFFICIENT_DATA_TIP = "Keep logging your symptoms daily"


def _above(value: float | None, threshold: float) -> bool:
    return is_finite_number(value) and value > threshold


def _below(value: float | None, threshold: float) -> bool:
    return is_finite_number(value) and value < threshold


def neutral_prediction() -> PredictionResult:
    return PredictionResult(
        likelihoods={
            category: SymptomLikelihood(likelihood_percent=NEUTRAL_LIKELIHOOD)
            for category in SymptomCategory
        },
        reason_text=INSUFFICIENT_DATA_REASON,
        weekly_trend=HealthTrend.STABLE,
        confidence_percent=NEUTRAL_PREDICTION_CONFIDENCE,
        preparation_tips=(INSUFFICIENT_DATA_TIP,),
    )


def predict_tomorrow(
    history: Sequence[SymptomRecord],
    forecast: EnvironmentalObservation | None,
) -> PredictionResult:
    """Project tomorrow's likelihood for each symptom category.

    Args:
        history: Symptom records, oldest first. Averages use the last seven;
            confidence and the weekly trend use the whole sequence.
        forecast: Tomorrow's forecast snapshot. Missing values skip the
            adjustment that needs them.

    Returns:
        PredictionResult with every likelihood in [0, 100]. Fewer than three
        records yields a neutral 50% prediction.
    """
    if len(history) < MIN_PREDICTION_RECORDS:
        logger.debug(
            "Prediction needs %d records, got %d", MIN_PREDICTION_RECORDS, len(history)
        )
        return neutral_prediction()

    recent = history[-WEEK_LENGTH:]
    mean_hot_flashes = mean_of(r.hot_flash_count for r in recent)
    mean_sleep = mean_of(r.sleep_quality for r in recent)
    mean_mood = mean_of(r.mood_overall for r in recent)

    risk = {
        SymptomCategory.HOT_FLASHES: mean_hot_flashes / HOT_FLASH_RISK_SCALE * 100,
        SymptomCategory.SLEEP_QUALITY: (SCALE_MAX - mean_sleep) / SCALE_MAX * 100,
        SymptomCategory.MOOD: (SCALE_MAX - mean_mood) / SCALE_MAX * 100,
        SymptomCategory.HEADACHES: float(HEADACHE_BASELINE_RISK),
    }
    reasons: list[str] = []

    pressure = forecast.pressure_hpa if forecast else None
    humidity = forecast.humidity_percent if forecast else None
    temperature = forecast.temperature_c if forecast else None

    if _below(pressure, LOW_PRESSURE_HPA):
        risk[SymptomCategory.HOT_FLASHES] += LOW_PRESSURE_HOT_FLASH_BONUS
        risk[SymptomCategory.HEADACHES] += LOW_PRESSURE_HEADACHE_BONUS
        reasons.append("low atmospheric pressure")

    if _above(humidity, HIGH_HUMIDITY_PERCENT):
        risk[SymptomCategory.SLEEP_QUALITY] += HIGH_HUMIDITY_SLEEP_BONUS
        reasons.append("high humidity")
    elif _below(humidity, LOW_HUMIDITY_PERCENT):
        risk[SymptomCategory.HOT_FLASHES] += LOW_HUMIDITY_HOT_FLASH_BONUS
        reasons.append("low humidity")

    if _above(temperature, HIGH_TEMPERATURE_C):
        risk[SymptomCategory.HOT_FLASHES] += HIGH_TEMPERATURE_HOT_FLASH_BONUS
        reasons.append("high temperature")

    risk = {category: clamp(value) for category, value in risk.items()}

    tips: list[str] = []
    for category, category_tips in PREPARATION_TIPS.items():
        if risk[category] > PREPARATION_RISK:
            tips.extend(category_tips)
    if not tips:
        tips.append(FAVORABLE_TIP)

    if reasons:
        reason_text = f"Forecast based on: {', '.join(reasons)}"
    else:
        reason_text = "Weather conditions are favorable"

    likelihoods = {
        SymptomCategory.HOT_FLASHES: SymptomLikelihood(
            likelihood_percent=round_half_up(risk[SymptomCategory.HOT_FLASHES]),
            predicted_value=round_half_up(
                risk[SymptomCategory.HOT_FLASHES] / 100
                * (mean_hot_flashes + PREDICTED_HOT_FLASH_OFFSET)
            ),
        ),
        SymptomCategory.SLEEP_QUALITY: SymptomLikelihood(
            likelihood_percent=round_half_up(risk[SymptomCategory.SLEEP_QUALITY]),
            predicted_value=round_half_up(
                SCALE_MAX - risk[SymptomCategory.SLEEP_QUALITY] / 100 * PREDICTED_SCALE_SPREAD
            ),
        ),
        SymptomCategory.MOOD: SymptomLikelihood(
            likelihood_percent=round_half_up(risk[SymptomCategory.MOOD]),
            predicted_value=round_half_up(
                SCALE_MAX - risk[SymptomCategory.MOOD] / 100 * PREDICTED_SCALE_SPREAD
            ),
        ),
        SymptomCategory.HEADACHES: SymptomLikelihood(
            likelihood_percent=round_half_up(risk[SymptomCategory.HEADACHES]),
        ),
    }

    weekly_trend, _ = weekly_mood_change(history)
    confidence = min(
        PREDICTION_CONFIDENCE_CAP,
        PREDICTION_CONFIDENCE_BASE + PREDICTION_CONFIDENCE_PER_RECORD * len(history),
    )

    return PredictionResult(
        likelihoods=likelihoods,
        reason_text=reason_text,
        weekly_trend=weekly_trend,
        confidence_percent=int(clamp(confidence)),
        preparation_tips=tuple(tips),
    )
