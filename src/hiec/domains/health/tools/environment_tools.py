"""MCP tools for weather-aware symptom analysis.

Environmental data is fetched concurrently (history, current conditions and
tomorrow's forecast) and handed to the pure correlation / prediction / alert
pipeline. Weather source failures are reported in the payload instead of
failing the tool.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from fastmcp import Context, FastMCP

from hiec.domains.health.connectors import EnvironmentalDataError
from hiec.domains.health.domain_logic.alert_generator import generate_alerts
from hiec.domains.health.domain_logic.environmental_correlation import (
    analyze_environmental_correlations,
)
from hiec.domains.health.domain_logic.environmental_pipeline import (
    run_environmental_analysis,
)
from hiec.domains.health.domain_logic.symptom_predictor import predict_tomorrow

if TYPE_CHECKING:
    from hiec.domains.health.connectors import (
        EnvironmentalDataProvider,
        SymptomDataProvider,
    )

logger = logging.getLogger(__name__)


def _unavailable(exc: Exception) -> str:
    return json.dumps({
        "status": "environment_unavailable",
        "message": f"Weather data is currently unavailable: {exc}",
    })


def register_environment_tools(
    mcp: FastMCP,
    symptom_provider: SymptomDataProvider,
    environment_provider: EnvironmentalDataProvider,
    *,
    history_days: int = 30,
) -> None:
    """Register environmental correlation, forecast and alert tools."""

    async def _fetch_all() -> dict[str, Any]:
        records, history, current, tomorrow = await asyncio.gather(
            symptom_provider.get_symptom_records(days=history_days),
            environment_provider.get_history(days=history_days),
            environment_provider.get_current(),
            environment_provider.get_tomorrow_forecast(),
        )
        return {
            "records": records,
            "history": history,
            "current": current,
            "tomorrow": tomorrow,
        }

    @mcp.tool
    async def environmental_correlations(ctx: Context) -> str:
        """Find which weather factors track your symptoms.

        Looks at pressure changes vs hot flashes, humidity vs sleep, and air
        quality vs mood. Needs at least 5 days with both diary and weather data.
        """
        try:
            records, history = await asyncio.gather(
                symptom_provider.get_symptom_records(days=history_days),
                environment_provider.get_history(days=history_days),
            )
        except EnvironmentalDataError as exc:
            logger.warning("Environmental history unavailable: %s", exc)
            return _unavailable(exc)

        insights = analyze_environmental_correlations(records, history)
        return json.dumps({
            "status": "ok",
            "days_analyzed": history_days,
            "insights": [i.to_dict() for i in insights],
        }, indent=2)

    @mcp.tool
    async def symptom_forecast(ctx: Context) -> str:
        """Forecast tomorrow's symptom likelihoods from your diary and the weather."""
        try:
            records, tomorrow = await asyncio.gather(
                symptom_provider.get_symptom_records(days=history_days),
                environment_provider.get_tomorrow_forecast(),
            )
        except EnvironmentalDataError as exc:
            logger.warning("Weather forecast unavailable: %s", exc)
            return _unavailable(exc)

        prediction = predict_tomorrow(records, tomorrow)
        return json.dumps({
            "status": "ok",
            "forecast_input": tomorrow.to_dict() if tomorrow else None,
            "prediction": prediction.to_dict(),
        }, indent=2)

    @mcp.tool
    async def weather_alerts(ctx: Context) -> str:
        """Advisories for tomorrow: pressure drops, humidity, air quality and UV."""
        try:
            current, tomorrow = await asyncio.gather(
                environment_provider.get_current(),
                environment_provider.get_tomorrow_forecast(),
            )
        except EnvironmentalDataError as exc:
            logger.warning("Weather data unavailable for alerts: %s", exc)
            return _unavailable(exc)

        alerts = generate_alerts(current, tomorrow, datetime.now(timezone.utc))
        return json.dumps({
            "status": "ok",
            "alert_count": len(alerts),
            "alerts": [a.to_dict() for a in alerts],
        }, indent=2)

    @mcp.tool
    async def environmental_report(ctx: Context) -> str:
        """Combined weather report: correlations, tomorrow's forecast and alerts."""
        try:
            data = await _fetch_all()
        except EnvironmentalDataError as exc:
            logger.warning("Environmental data unavailable: %s", exc)
            return _unavailable(exc)

        report = run_environmental_analysis(
            data["records"],
            data["history"],
            data["current"],
            data["tomorrow"],
            datetime.now(timezone.utc),
        )
        return json.dumps({
            "status": "ok",
            "data_source": environment_provider.data_source,
            **report.to_dict(),
        }, indent=2)
