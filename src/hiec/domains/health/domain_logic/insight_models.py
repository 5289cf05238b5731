"""Input snapshots, result types and closed vocabularies for the insight engine."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Mapping

from hiec.domains.health.domain_logic.numeric import (
    coerce_number,
    is_finite_number,
    round_half_up,
)
from hiec.domains.health.domain_logic.thresholds import SCALE_NEUTRAL


# ---------------------------------------------------------------------------
# Closed vocabularies
# ---------------------------------------------------------------------------

class SymptomCategory(str, Enum):
    HOT_FLASHES = "hot_flashes"
    SLEEP_QUALITY = "sleep_quality"
    MOOD = "mood"
    HEADACHES = "headaches"


class HealthTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


class TrendShape(str, Enum):
    MONOTONIC_INCREASE = "monotonic-increase"
    MONOTONIC_DECREASE = "monotonic-decrease"
    STABLE = "stable"
    VOLATILE = "volatile"
    INSUFFICIENT_DATA = "insufficient-data"


class InsightKind(str, Enum):
    PATTERN = "pattern"
    CORRELATION = "correlation"
    PREDICTION = "prediction"
    RECOMMENDATION = "recommendation"
    ACHIEVEMENT = "achievement"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EnvironmentalFactor(str, Enum):
    PRESSURE = "pressure"
    HUMIDITY = "humidity"
    AIR_QUALITY = "air-quality"


class ForecastDirection(str, Enum):
    BETTER = "better"
    SAME = "same"
    WORSE = "worse"


class AlertKind(str, Enum):
    PRESSURE_DROP = "pressure-drop"
    HIGH_HUMIDITY = "high-humidity"
    POOR_AIR_QUALITY = "poor-air-quality"
    UV_WARNING = "uv-warning"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class AnalysisPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]


_PERIOD_DAYS = {
    AnalysisPeriod.WEEK: 7,
    AnalysisPeriod.MONTH: 30,
    AnalysisPeriod.QUARTER: 90,
}


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _plain(value: Any) -> Any:
    """Convert result objects into JSON-ready builtins."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        return _plain(self)


def _pick(data: Mapping[str, Any], *paths: str) -> Any:
    """Return the first non-None value found at any dotted path."""
    for path in paths:
        node: Any = data
        for part in path.split("."):
            if not isinstance(node, Mapping):
                node = None
                break
            node = node.get(part)
        if node is not None:
            return node
    return None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    raise ValueError(f"Unrecognized date value: {value!r}")


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Unrecognized timestamp value: {value!r}")


def _scale(val: Any) -> int:
    return round_half_up(coerce_number(val, default=SCALE_NEUTRAL))


# ---------------------------------------------------------------------------
# Input snapshots (read-only to the engine)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SymptomRecord(_Serializable):
    """One day's self-reported symptom diary entry."""

    date: date
    hot_flash_count: int = 0
    sleep_quality: int = SCALE_NEUTRAL      # 1-5
    mood_overall: int = SCALE_NEUTRAL       # 1-5
    energy_level: int = SCALE_NEUTRAL       # 1-5
    notes: str | None = None

    def __post_init__(self) -> None:
        # Non-finite or non-numeric values carry no signal; use the defaults.
        defaults = {
            "hot_flash_count": 0,
            "sleep_quality": SCALE_NEUTRAL,
            "mood_overall": SCALE_NEUTRAL,
            "energy_level": SCALE_NEUTRAL,
        }
        for name, default in defaults.items():
            if not is_finite_number(getattr(self, name)):
                object.__setattr__(self, name, default)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SymptomRecord:
        """Build a record from a loosely-typed diary entry.

        Accepts camelCase, snake_case and the nested diary shape
        (``hotFlashes.count``, ``sleep.quality``, ``mood.overall``). Missing
        or malformed scale values fall back to the neutral midpoint.
        """
        hot_flashes = coerce_number(
            _pick(data, "hot_flash_count", "hotFlashCount", "hotFlashes.count", "hot_flashes.count"),
            default=0.0,
        )
        return cls(
            date=_parse_date(_pick(data, "date", "entry_date")),
            hot_flash_count=max(0, round_half_up(hot_flashes)),
            sleep_quality=_scale(_pick(data, "sleep_quality", "sleepQuality", "sleep.quality")),
            mood_overall=_scale(_pick(data, "mood_overall", "moodOverall", "mood.overall")),
            energy_level=_scale(_pick(data, "energy_level", "energyLevel", "energy")),
            notes=_pick(data, "notes"),
        )


@dataclass(frozen=True)
class EnvironmentalObservation(_Serializable):
    """One day's (or instant's) weather and air-quality reading.

    Any factor may be ``None`` when the provider did not report it.
    """

    timestamp: datetime
    pressure_hpa: float | None = None
    humidity_percent: float | None = None
    temperature_c: float | None = None
    pm25: float | None = None
    uv_index: float | None = None

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EnvironmentalObservation:
        """Build an observation from a flat or provider-nested mapping."""
        return cls(
            timestamp=_parse_timestamp(_pick(data, "timestamp", "date")),
            pressure_hpa=coerce_number(
                _pick(data, "pressure_hpa", "pressureHpa", "pressure", "weather.current.pressure"),
                default=None,
            ),
            humidity_percent=coerce_number(
                _pick(data, "humidity_percent", "humidityPercent", "humidity", "weather.current.humidity"),
                default=None,
            ),
            temperature_c=coerce_number(
                _pick(data, "temperature_c", "temperatureC", "temperature", "weather.current.temperature"),
                default=None,
            ),
            pm25=coerce_number(
                _pick(data, "pm25", "pm2_5", "airQuality.current.pm2_5", "air_quality.current.pm2_5"),
                default=None,
            ),
            uv_index=coerce_number(
                _pick(data, "uv_index", "uvIndex", "weather.current.uv_index"),
                default=None,
            ),
        )


@dataclass(frozen=True)
class UserProfile(_Serializable):
    """Coarse onboarding profile supplied by the profile collaborator."""

    post_menopausal: bool = False


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryScores(_Serializable):
    symptoms: int
    sleep: int
    mood: int
    energy: int


@dataclass(frozen=True)
class HealthScore(_Serializable):
    """Composite 0-100 score with four sub-scores and a week-over-week trend."""

    overall: int
    categories: CategoryScores
    trend: HealthTrend
    weekly_change_points: int


@dataclass(frozen=True)
class Insight(_Serializable):
    id: str
    kind: InsightKind
    priority: Priority
    title: str
    description: str
    confidence_percent: int
    actionable: bool = True
    actions: tuple[str, ...] = ()
    trend: HealthTrend | None = None


@dataclass(frozen=True)
class SymptomTrend(_Serializable):
    symptom: SymptomCategory
    symptom_name: str
    current_week_average: float
    previous_week_average: float
    direction: TrendDirection
    shape: TrendShape
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class EnvironmentalForecast(_Serializable):
    direction: ForecastDirection
    reason: str
    suggestions: tuple[str, ...]


@dataclass(frozen=True)
class EnvironmentalInsight(_Serializable):
    factor: EnvironmentalFactor
    severity: Severity
    title: str
    description: str
    correlation_coefficient: float      # -1..1
    confidence_percent: int
    recommendations: tuple[str, ...]
    forecast: EnvironmentalForecast


@dataclass(frozen=True)
class SymptomLikelihood(_Serializable):
    likelihood_percent: int
    predicted_value: int | None = None


@dataclass(frozen=True)
class PredictionResult(_Serializable):
    """Tomorrow's per-category symptom likelihoods."""

    likelihoods: dict[SymptomCategory, SymptomLikelihood]
    reason_text: str
    weekly_trend: HealthTrend
    confidence_percent: int
    preparation_tips: tuple[str, ...]


@dataclass(frozen=True)
class DailyPrediction(_Serializable):
    target: SymptomCategory
    value: int
    confidence_percent: int
    description: str
    kind: str = "daily"


@dataclass(frozen=True)
class WeatherAlert(_Serializable):
    """A short-lived advisory; must not be shown at or after ``valid_until``."""

    kind: AlertKind
    severity: AlertSeverity
    title: str
    message: str
    action: str
    valid_until: datetime

    @property
    def alert_id(self) -> str:
        """Identity the presentation layer uses to remember dismissals."""
        return f"{self.kind.value}-{self.valid_until.isoformat()}"

    def is_active(self, at: datetime) -> bool:
        return at < self.valid_until

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["alert_id"] = self.alert_id
        return data


@dataclass(frozen=True)
class HealthAnalysis(_Serializable):
    health_score: HealthScore
    insights: tuple[Insight, ...] = ()
    trends: tuple[SymptomTrend, ...] = ()
    predictions: tuple[DailyPrediction, ...] = ()


@dataclass(frozen=True)
class EnvironmentalReport(_Serializable):
    insights: tuple[EnvironmentalInsight, ...]
    prediction: PredictionResult
    alerts: tuple[WeatherAlert, ...] = field(default_factory=tuple)


def start_of_day_after(now: datetime, days: int) -> datetime:
    """Midnight ``days`` calendar days after ``now``, in ``now``'s timezone."""
    target = now.date() + timedelta(days=days)
    return datetime.combine(target, time.min, tzinfo=now.tzinfo)
