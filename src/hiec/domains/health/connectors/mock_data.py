"""Mock diary and weather generators for development and testing.

Series are deterministic functions of the day offset so repeated calls give
identical snapshots. The weather is built to show a visible pressure effect:
hot flashes rise on days after a pressure drop.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone

from hiec.domains.health.domain_logic.insight_models import (
    EnvironmentalObservation,
    SymptomRecord,
)


def _pressure(offset: int) -> float:
    """Slow pressure wave around 1012 hPa."""
    return round(1012 + 9 * math.sin(offset / 2.5), 1)


def get_mock_symptom_records(today: date, days: int = 90) -> list[SymptomRecord]:
    """Return one diary record per day ending at ``today``, oldest first."""
    records = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        pressure_change = _pressure(offset) - _pressure(offset + 1)
        hot_flashes = max(0, round(2 - pressure_change / 2 + (offset % 3 == 0)))
        sleep = 4 if offset % 4 else 2
        mood = 4 if hot_flashes <= 2 else 3
        records.append(SymptomRecord(
            date=day,
            hot_flash_count=hot_flashes,
            sleep_quality=sleep,
            mood_overall=mood,
            energy_level=3 + (offset % 2),
        ))
    return records


def _observation(day: date, offset: int) -> EnvironmentalObservation:
    return EnvironmentalObservation(
        timestamp=datetime.combine(day, time(12, 0), tzinfo=timezone.utc),
        pressure_hpa=_pressure(offset),
        humidity_percent=round(62 + 14 * math.cos(offset / 3.0), 1),
        temperature_c=round(19 + 6 * math.sin(offset / 5.0), 1),
        pm25=round(14 + 8 * math.cos(offset / 4.0), 1),
        uv_index=round(4 + 3 * math.sin(offset / 6.0), 1),
    )


def get_mock_environment_history(today: date, days: int = 30) -> list[EnvironmentalObservation]:
    """Return one midday observation per day ending at ``today``, oldest first."""
    return [
        _observation(today - timedelta(days=offset), offset)
        for offset in range(days - 1, -1, -1)
    ]


def get_mock_current_conditions(today: date) -> EnvironmentalObservation:
    return _observation(today, 0)


def get_mock_tomorrow_forecast(today: date) -> EnvironmentalObservation:
    return _observation(today + timedelta(days=1), -1)
