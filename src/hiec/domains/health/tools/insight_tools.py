"""MCP tools for diary-based health insights.

These tools fetch the symptom diary from the configured provider and run the
pure insight engine over it: health score, week-over-week trends, ranked
insights, and the combined period analysis.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from hiec.domains.health.domain_logic.health_score import compute_health_score
from hiec.domains.health.domain_logic.insight_generator import (
    analyze_period,
    filter_period,
    generate_insights,
)
from hiec.domains.health.domain_logic.insight_models import AnalysisPeriod
from hiec.domains.health.domain_logic.trend_analyzer import compute_trends

if TYPE_CHECKING:
    from hiec.domains.health.connectors import SymptomDataProvider

logger = logging.getLogger(__name__)


def validate_period(value: str | None, default: str = "month") -> AnalysisPeriod:
    """Validate and default the period parameter."""
    if value in (None, ""):
        value = default
    try:
        return AnalysisPeriod(value)
    except ValueError:
        raise ValueError("period must be one of: week | month | quarter") from None


def register_insight_tools(
    mcp: FastMCP,
    symptom_provider: SymptomDataProvider,
    *,
    default_period: str = "month",
) -> None:
    """Register diary insight tools on the MCP server."""

    async def _window(period: AnalysisPeriod):
        records = await symptom_provider.get_symptom_records(days=period.days)
        return filter_period(records, period, symptom_provider.today)

    @mcp.tool
    async def health_score(ctx: Context, period: str | None = None) -> str:
        """Compute your composite 0-100 health score.

        Combines hot flash frequency, sleep quality, mood and energy, with a
        week-over-week trend based on mood.

        Args:
            period: week, month or quarter (default from server settings).
        """
        resolved = validate_period(period, default_period)
        records = await _window(resolved)
        score = compute_health_score(records)
        return json.dumps({
            "status": "ok",
            "period": resolved.value,
            "records_analyzed": len(records),
            "health_score": score.to_dict(),
            **symptom_provider.get_provenance(),
        }, indent=2)

    @mcp.tool
    async def symptom_trends(ctx: Context, period: str | None = None) -> str:
        """Compare this week with last week for hot flashes and sleep quality.

        Requires at least 14 days of diary entries.

        Args:
            period: week, month or quarter (default from server settings).
        """
        resolved = validate_period(period, default_period)
        records = await _window(resolved)
        trends = compute_trends(records)
        if not trends:
            return json.dumps({
                "status": "insufficient_data",
                "records_analyzed": len(records),
                "message": "At least 14 days of diary entries are needed for trend analysis.",
            })
        return json.dumps({
            "status": "ok",
            "period": resolved.value,
            "trends": [t.to_dict() for t in trends],
        }, indent=2)

    @mcp.tool
    async def health_insights(ctx: Context, period: str | None = None) -> str:
        """List insights detected in your symptom diary.

        Covers frequent hot flashes, poor sleep streaks, mood and symptom
        links, good weeks, and advice for your menopause phase.

        Args:
            period: week, month or quarter (default from server settings).
        """
        resolved = validate_period(period, default_period)
        records = await _window(resolved)
        profile = await symptom_provider.get_user_profile()
        insights = generate_insights(records, profile)
        return json.dumps({
            "status": "ok",
            "period": resolved.value,
            "insight_count": len(insights),
            "insights": [i.to_dict() for i in insights],
        }, indent=2)

    @mcp.tool
    async def health_analysis(ctx: Context, period: str | None = None) -> str:
        """Full dashboard analysis: score, insights, trends and predictions.

        Args:
            period: week, month or quarter (default from server settings).
        """
        resolved = validate_period(period, default_period)
        records = await symptom_provider.get_symptom_records(days=resolved.days)
        profile = await symptom_provider.get_user_profile()
        analysis = analyze_period(records, profile, resolved, symptom_provider.today)
        return json.dumps({
            "status": "ok",
            "period": resolved.value,
            **analysis.to_dict(),
            **symptom_provider.get_provenance(),
        }, indent=2)
