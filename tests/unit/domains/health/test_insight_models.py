"""Tests for input coercion and result serialization."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from hiec.domains.health.domain_logic.insight_models import (
    AnalysisPeriod,
    EnvironmentalObservation,
    SymptomRecord,
    start_of_day_after,
)
from hiec.domains.health.domain_logic.numeric import coerce_number, round_half_up


class TestSymptomRecordFromDict:
    def test_nested_diary_shape(self):
        record = SymptomRecord.from_dict({
            "date": "2026-02-03T08:00:00Z",
            "hotFlashes": {"count": 3},
            "sleep": {"quality": 4},
            "mood": {"overall": "5"},
            "notes": "slept badly after coffee",
        })
        assert record.date == date(2026, 2, 3)
        assert record.hot_flash_count == 3
        assert record.sleep_quality == 4
        assert record.mood_overall == 5
        assert record.energy_level == 3
        assert record.notes == "slept badly after coffee"

    def test_snake_case_shape(self):
        record = SymptomRecord.from_dict({
            "date": date(2026, 2, 3),
            "hot_flash_count": 2,
            "sleep_quality": 1,
            "mood_overall": 2,
            "energy_level": 5,
        })
        assert (record.hot_flash_count, record.sleep_quality, record.mood_overall, record.energy_level) == (2, 1, 2, 5)

    def test_malformed_values_fall_back(self):
        record = SymptomRecord.from_dict({
            "date": "2026-02-03",
            "hotFlashCount": -4,
            "sleepQuality": "not a number",
            "moodOverall": float("nan"),
        })
        assert record.hot_flash_count == 0
        assert record.sleep_quality == 3
        assert record.mood_overall == 3

    def test_missing_date_is_rejected(self):
        with pytest.raises(ValueError):
            SymptomRecord.from_dict({"hot_flash_count": 1})


class TestEnvironmentalObservationFromDict:
    def test_provider_nested_shape(self):
        obs = EnvironmentalObservation.from_dict({
            "timestamp": "2026-02-03T12:00:00Z",
            "weather": {"current": {"pressure": 1008, "humidity": 77}},
            "airQuality": {"current": {"pm2_5": 12.5}},
        })
        assert obs.timestamp == datetime(2026, 2, 3, 12, 0, tzinfo=timezone.utc)
        assert obs.day == date(2026, 2, 3)
        assert obs.pressure_hpa == 1008.0
        assert obs.humidity_percent == 77.0
        assert obs.pm25 == 12.5
        assert obs.temperature_c is None
        assert obs.uv_index is None

    def test_flat_shape(self):
        obs = EnvironmentalObservation.from_dict({
            "date": "2026-02-03",
            "pressure_hpa": "1011.5",
            "uvIndex": 6,
        })
        assert obs.day == date(2026, 2, 3)
        assert obs.pressure_hpa == 1011.5
        assert obs.uv_index == 6.0


class TestSerialization:
    def test_record_to_dict(self):
        record = SymptomRecord(date=date(2026, 2, 3), hot_flash_count=1)
        assert record.to_dict() == {
            "date": "2026-02-03",
            "hot_flash_count": 1,
            "sleep_quality": 3,
            "mood_overall": 3,
            "energy_level": 3,
            "notes": None,
        }


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [
        (2.5, 3), (-2.5, -2), (1.49, 1), (0.5, 1), (-0.5, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (None, 7.0), (True, 7.0), ("abc", 7.0), (float("inf"), 7.0), ("3", 3.0), (4, 4.0),
    ])
    def test_coerce_number(self, value, expected):
        assert coerce_number(value, default=7.0) == expected

    def test_period_lengths(self):
        assert [p.days for p in AnalysisPeriod] == [7, 30, 90]

    def test_start_of_day_after(self):
        tz = timezone(timedelta(hours=-5))
        now = datetime(2026, 2, 28, 22, 15, tzinfo=tz)
        assert start_of_day_after(now, 2) == datetime(2026, 3, 2, 0, 0, tzinfo=tz)
