"""Threshold advisories from today's conditions and tomorrow's forecast.

Stateless: every call evaluates the rules afresh. Deduplication of alerts the
user already dismissed belongs to the presentation layer, keyed by
``WeatherAlert.alert_id``.
"""

from __future__ import annotations

from datetime import datetime

from hiec.domains.health.domain_logic.insight_models import (
    AlertKind,
    AlertSeverity,
    EnvironmentalObservation,
    WeatherAlert,
    start_of_day_after,
)
from hiec.domains.health.domain_logic.numeric import is_finite_number, round_half_up
from hiec.domains.health.domain_logic.thresholds import (
    ALERT_HUMIDITY_PERCENT,
    ALERT_PM25_DANGER,
    ALERT_PM25_WARNING,
    ALERT_PRESSURE_DROP_HPA,
    ALERT_UV_INDEX,
    ALERT_VALIDITY_DAYS,
)


def _fmt(value: float) -> str:
    return f"{value:g}"


def generate_alerts(
    current: EnvironmentalObservation | None,
    forecast: EnvironmentalObservation | None,
    now: datetime,
) -> list[WeatherAlert]:
    """Emit advisories for tomorrow.

    Args:
        current: Today's conditions (only pressure is used).
        forecast: Tomorrow's forecast.
        now: Reference instant; alerts stay valid until the start of the day
            after tomorrow in ``now``'s timezone.

    Returns:
        Alerts in rule order: pressure drop, humidity, air quality, UV.
    """
    if forecast is None:
        return []

    valid_until = start_of_day_after(now, ALERT_VALIDITY_DAYS)
    alerts: list[WeatherAlert] = []

    current_pressure = current.pressure_hpa if current else None
    if is_finite_number(current_pressure) and is_finite_number(forecast.pressure_hpa):
        drop = current_pressure - forecast.pressure_hpa
        if drop > ALERT_PRESSURE_DROP_HPA:
            alerts.append(WeatherAlert(
                kind=AlertKind.PRESSURE_DROP,
                severity=AlertSeverity.WARNING,
                title="Atmospheric pressure drop",
                message=(
                    f"Pressure is expected to fall by {round_half_up(drop)} hPa tomorrow. "
                    "This may bring on more hot flashes."
                ),
                action="Be prepared: dress in layers and avoid hot drinks.",
                valid_until=valid_until,
            ))

    humidity = forecast.humidity_percent
    if is_finite_number(humidity) and humidity > ALERT_HUMIDITY_PERCENT:
        alerts.append(WeatherAlert(
            kind=AlertKind.HIGH_HUMIDITY,
            severity=AlertSeverity.INFO,
            title="High humidity",
            message=f"Humidity will reach {_fmt(humidity)}% tomorrow. This may affect your sleep.",
            action="Run a dehumidifier and air out the bedroom before bed.",
            valid_until=valid_until,
        ))

    pm25 = forecast.pm25
    if is_finite_number(pm25) and pm25 > ALERT_PM25_WARNING:
        alerts.append(WeatherAlert(
            kind=AlertKind.POOR_AIR_QUALITY,
            severity=AlertSeverity.DANGER if pm25 > ALERT_PM25_DANGER else AlertSeverity.WARNING,
            title="Poor air quality",
            message=f"PM2.5 is forecast at {_fmt(pm25)} μg/m³ tomorrow.",
            action="Limit time outdoors and keep windows closed during peak hours.",
            valid_until=valid_until,
        ))

    uv_index = forecast.uv_index
    if is_finite_number(uv_index) and uv_index > ALERT_UV_INDEX:
        alerts.append(WeatherAlert(
            kind=AlertKind.UV_WARNING,
            severity=AlertSeverity.WARNING,
            title="High UV index",
            message=f"Tomorrow's UV index: {_fmt(uv_index)}. High risk of sunburn.",
            action="Use sunscreen, wear a hat and limit time in the sun.",
            valid_until=valid_until,
        ))

    return alerts
