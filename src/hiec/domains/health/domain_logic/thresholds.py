"""Named thresholds for the health insight and environmental correlation engine.

Every gate, cut-off, baseline and bonus the engine applies lives here so the
rules can be tuned without touching control flow.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Sample-size gates
# ---------------------------------------------------------------------------

WEEK_LENGTH = 7
MIN_TREND_RECORDS = 2 * WEEK_LENGTH
MIN_ENVIRONMENT_PAIRS = 5
MIN_PREDICTION_RECORDS = 3
MIN_DAILY_PREDICTION_RECORDS = 5
MIN_SHAPE_VALUES = 3
MIN_MOOD_CORRELATION_RECORDS = 3

# ---------------------------------------------------------------------------
# Scales and neutral defaults
# ---------------------------------------------------------------------------

SCALE_MAX = 5                   # sleep / mood / energy self-report scale (1-5)
SCALE_NEUTRAL = 3               # assumed when a scale value is missing
NEUTRAL_SCORE = 70              # health score with no data at all
NEUTRAL_LIKELIHOOD = 50
NEUTRAL_PREDICTION_CONFIDENCE = 30

# ---------------------------------------------------------------------------
# Health score
# ---------------------------------------------------------------------------

HOT_FLASH_SCORE_PENALTY = 10    # points lost per average daily hot flash
WEEKLY_CHANGE_MULTIPLIER = 20   # mood delta (1-5 scale) -> score points
WEEKLY_CHANGE_THRESHOLD = 5

# ---------------------------------------------------------------------------
# Trend shape
# ---------------------------------------------------------------------------

VOLATILITY_VARIANCE = 1.0

# ---------------------------------------------------------------------------
# Environmental correlation
# ---------------------------------------------------------------------------

PRESSURE_REPORT_CORRELATION = 0.3
PRESSURE_HIGH_CORRELATION = 0.6

HUMIDITY_REPORT_CORRELATION = 0.25
HUMIDITY_HIGH_CORRELATION = 0.4
HUMIDITY_MEDIUM_CORRELATION = 0.25
HUMID_DAY_PERCENT = 70.0
HUMID_DAY_FRACTION = 0.30

AIR_QUALITY_REPORT_CORRELATION = 0.2
AIR_QUALITY_HIGH_CORRELATION = 0.4
AIR_QUALITY_MEDIUM_CORRELATION = 0.25
PM25_ELEVATED = 25.0            # μg/m³, mean level that counts as impact on its own
PM25_POOR = 35.0                # μg/m³

# ---------------------------------------------------------------------------
# Symptom prediction
# ---------------------------------------------------------------------------

HOT_FLASH_RISK_SCALE = 10       # average daily hot flashes that maps to 100%
HEADACHE_BASELINE_RISK = 30
LOW_PRESSURE_HPA = 1000.0
LOW_PRESSURE_HOT_FLASH_BONUS = 25
LOW_PRESSURE_HEADACHE_BONUS = 20
HIGH_HUMIDITY_PERCENT = 70.0
HIGH_HUMIDITY_SLEEP_BONUS = 30
LOW_HUMIDITY_PERCENT = 30.0
LOW_HUMIDITY_HOT_FLASH_BONUS = 15
HIGH_TEMPERATURE_C = 25.0
HIGH_TEMPERATURE_HOT_FLASH_BONUS = 20
PREPARATION_RISK = 60
PREDICTION_CONFIDENCE_BASE = 40
PREDICTION_CONFIDENCE_PER_RECORD = 2
PREDICTION_CONFIDENCE_CAP = 90
PREDICTED_HOT_FLASH_OFFSET = 2
PREDICTED_SCALE_SPREAD = 2

DAILY_PREDICTION_WINDOW = 3
DAILY_PREDICTION_CONFIDENCE = 65

# ---------------------------------------------------------------------------
# Insight rules
# ---------------------------------------------------------------------------

HOT_FLASH_DAY_FRACTION = 0.6
HOT_FLASH_PATTERN_CONFIDENCE = 85
POOR_SLEEP_QUALITY = 2
POOR_SLEEP_MIN_DAYS = 3         # fires when strictly more poor nights than this
SLEEP_INSIGHT_CONFIDENCE = 78
MOOD_SYMPTOM_CORRELATION = 0.6
MOOD_SYMPTOM_CONFIDENCE = 72
GOOD_MOOD = 4
GOOD_WEEK_MIN_DAYS = 5
GOOD_WEEK_CONFIDENCE = 90
PHASE_ADVICE_CONFIDENCE = 88

# ---------------------------------------------------------------------------
# Weather alerts
# ---------------------------------------------------------------------------

ALERT_PRESSURE_DROP_HPA = 5.0
ALERT_HUMIDITY_PERCENT = 75.0
ALERT_UV_INDEX = 6.0
ALERT_PM25_WARNING = 35.0
ALERT_PM25_DANGER = 55.0
ALERT_VALIDITY_DAYS = 2         # alerts expire at the start of the day after tomorrow


def as_dict() -> dict[str, float | int]:
    """Return every threshold by name, for read-only publication."""
    return {
        name: value
        for name, value in sorted(globals().items())
        if name.isupper() and isinstance(value, (int, float))
    }
