"""Shared test fixtures for Health Insight tests."""

from __future__ import annotations

import sys
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEFAULT_PERIOD", "month")
    monkeypatch.setenv("ENVIRONMENT_HISTORY_DAYS", "30")
    monkeypatch.setenv("PROFILE_POST_MENOPAUSAL", "false")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from hiec.domains.health.domain_logic.insight_models import (  # noqa: E402
    EnvironmentalObservation,
    SymptomRecord,
)

START_DATE = date(2026, 2, 1)


def _make_records(
    count: int | None = None,
    *,
    hot_flashes: list[int] | int = 0,
    sleep: list[int] | int = 4,
    mood: list[int] | int = 4,
    energy: list[int] | int = 4,
    start: date = START_DATE,
) -> list[SymptomRecord]:
    """Create consecutive daily records; list arguments set per-day values."""
    columns = [hot_flashes, sleep, mood, energy]
    if count is None:
        count = max((len(c) for c in columns if isinstance(c, list)), default=0)

    def _at(column, i):
        return column[i] if isinstance(column, list) else column

    return [
        SymptomRecord(
            date=start + timedelta(days=i),
            hot_flash_count=_at(hot_flashes, i),
            sleep_quality=_at(sleep, i),
            mood_overall=_at(mood, i),
            energy_level=_at(energy, i),
        )
        for i in range(count)
    ]


def _make_observations(
    count: int | None = None,
    *,
    pressure: list[float] | float | None = 1013.0,
    humidity: list[float] | float | None = 50.0,
    temperature: list[float] | float | None = 20.0,
    pm25: list[float] | float | None = 10.0,
    uv_index: list[float] | float | None = 3.0,
    start: date = START_DATE,
) -> list[EnvironmentalObservation]:
    """Create consecutive daily midday observations."""
    columns = [pressure, humidity, temperature, pm25, uv_index]
    if count is None:
        count = max((len(c) for c in columns if isinstance(c, list)), default=0)

    def _at(column, i):
        return column[i] if isinstance(column, list) else column

    return [
        EnvironmentalObservation(
            timestamp=datetime.combine(start + timedelta(days=i), time(12, 0), tzinfo=timezone.utc),
            pressure_hpa=_at(pressure, i),
            humidity_percent=_at(humidity, i),
            temperature_c=_at(temperature, i),
            pm25=_at(pm25, i),
            uv_index=_at(uv_index, i),
        )
        for i in range(count)
    ]


def _forecast(
    *,
    pressure: float | None = 1013.0,
    humidity: float | None = 50.0,
    temperature: float | None = 20.0,
    pm25: float | None = 10.0,
    uv_index: float | None = 3.0,
) -> EnvironmentalObservation:
    """A single forecast snapshot for tomorrow."""
    return EnvironmentalObservation(
        timestamp=datetime(2026, 2, 16, 12, 0, tzinfo=timezone.utc),
        pressure_hpa=pressure,
        humidity_percent=humidity,
        temperature_c=temperature,
        pm25=pm25,
        uv_index=uv_index,
    )


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

@pytest.fixture
def symptom_provider():
    from hiec.domains.health.connectors.providers import MockSymptomDataProvider

    return MockSymptomDataProvider()


@pytest.fixture
def environment_provider():
    from hiec.domains.health.connectors.providers import MockEnvironmentalDataProvider

    return MockEnvironmentalDataProvider()


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_records():
    """Factory for consecutive daily SymptomRecords."""
    return _make_records


@pytest.fixture
def make_observations():
    """Factory for consecutive daily EnvironmentalObservations."""
    return _make_observations


@pytest.fixture
def make_forecast():
    """Factory for a single tomorrow forecast snapshot."""
    return _forecast
