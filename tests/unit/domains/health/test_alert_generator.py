"""Tests for weather advisories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from hiec.domains.health.domain_logic.alert_generator import generate_alerts
from hiec.domains.health.domain_logic.insight_models import AlertKind, AlertSeverity

NOW = datetime(2026, 2, 15, 18, 30, tzinfo=timezone.utc)
VALID_UNTIL = datetime(2026, 2, 17, 0, 0, tzinfo=timezone.utc)


class TestGenerateAlerts:
    def test_pressure_humidity_and_uv(self, make_forecast):
        current = make_forecast(pressure=1015.0)
        tomorrow = make_forecast(pressure=1008.0, humidity=80.0, uv_index=7.0)
        alerts = generate_alerts(current, tomorrow, NOW)

        assert [a.kind for a in alerts] == [
            AlertKind.PRESSURE_DROP,
            AlertKind.HIGH_HUMIDITY,
            AlertKind.UV_WARNING,
        ]
        assert [a.severity for a in alerts] == [
            AlertSeverity.WARNING,
            AlertSeverity.INFO,
            AlertSeverity.WARNING,
        ]
        assert "fall by 7 hPa" in alerts[0].message
        assert "80%" in alerts[1].message
        assert "UV index: 7" in alerts[2].message
        assert all(a.valid_until == VALID_UNTIL for a in alerts)

    def test_calm_weather_has_no_alerts(self, make_forecast):
        assert generate_alerts(make_forecast(), make_forecast(), NOW) == []

    def test_no_forecast_has_no_alerts(self, make_forecast):
        assert generate_alerts(make_forecast(), None, NOW) == []

    def test_thresholds_are_exclusive(self, make_forecast):
        current = make_forecast(pressure=1015.0)
        tomorrow = make_forecast(pressure=1010.0, humidity=75.0, uv_index=6.0, pm25=35.0)
        assert generate_alerts(current, tomorrow, NOW) == []

    def test_pressure_rise_is_not_an_alert(self, make_forecast):
        alerts = generate_alerts(make_forecast(pressure=1000.0), make_forecast(pressure=1020.0), NOW)
        assert alerts == []

    def test_missing_current_skips_pressure_only(self, make_forecast):
        alerts = generate_alerts(None, make_forecast(pressure=990.0, humidity=90.0), NOW)
        assert [a.kind for a in alerts] == [AlertKind.HIGH_HUMIDITY]

    @pytest.mark.parametrize("pm25,severity", [
        (40.0, AlertSeverity.WARNING),
        (55.0, AlertSeverity.WARNING),
        (60.0, AlertSeverity.DANGER),
    ])
    def test_poor_air_quality(self, make_forecast, pm25, severity):
        [alert] = generate_alerts(make_forecast(), make_forecast(pm25=pm25), NOW)
        assert alert.kind == AlertKind.POOR_AIR_QUALITY
        assert alert.severity == severity


class TestAlertLifetime:
    def test_validity_follows_the_reference_timezone(self, make_forecast):
        tz = timezone(timedelta(hours=3))
        now = datetime(2026, 2, 15, 23, 59, tzinfo=tz)
        [alert] = generate_alerts(make_forecast(), make_forecast(uv_index=8.0), now)
        assert alert.valid_until == datetime(2026, 2, 17, 0, 0, tzinfo=tz)

    def test_is_active_until_valid_until(self, make_forecast):
        [alert] = generate_alerts(make_forecast(), make_forecast(uv_index=8.0), NOW)
        assert alert.is_active(NOW)
        assert alert.is_active(VALID_UNTIL - timedelta(seconds=1))
        assert not alert.is_active(VALID_UNTIL)

    def test_alert_id_and_serialization(self, make_forecast):
        [alert] = generate_alerts(make_forecast(), make_forecast(uv_index=8.0), NOW)
        assert alert.alert_id == "uv-warning-2026-02-17T00:00:00+00:00"

        data = alert.to_dict()
        assert data["alert_id"] == alert.alert_id
        assert data["kind"] == "uv-warning"
        assert data["severity"] == "warning"
        assert data["valid_until"] == "2026-02-17T00:00:00+00:00"

    def test_repeated_calls_agree(self, make_forecast):
        tomorrow = make_forecast(pressure=990.0, humidity=80.0, pm25=70.0, uv_index=9.0)
        first = generate_alerts(make_forecast(), tomorrow, NOW)
        second = generate_alerts(make_forecast(), tomorrow, NOW)
        assert [a.to_dict() for a in first] == [a.to_dict() for a in second]
        assert len(first) == 4


def test_ten_hpa_drop_alone(make_forecast):
    alerts = generate_alerts(
        make_forecast(pressure=1015.0),
        make_forecast(pressure=1005.0, humidity=60.0, uv_index=3.0),
        NOW,
    )
    assert [(a.kind, a.severity) for a in alerts] == [(AlertKind.PRESSURE_DROP, AlertSeverity.WARNING)]
