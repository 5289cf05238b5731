"""MCP Prompts: pre-built interaction templates for symptom and weather journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_insight_prompts(mcp: FastMCP) -> None:
    """Register health insight MCP prompts."""

    @mcp.prompt()
    def symptom_review_prompt(time_period: str = "month") -> str:
        """Prompt template for reviewing the symptom diary over a period."""
        return f"""Let's review my symptom diary for the last {time_period}. I'd like to:

1. See my overall health score and how it changed this week
2. Compare hot flashes and sleep quality with the previous week
3. Hear which patterns stand out and what I can do about them
4. Get one or two things to focus on next week

Please be honest but encouraging. This is not medical advice."""

    @mcp.prompt()
    def weather_readiness_prompt() -> str:
        """Prompt template for preparing for tomorrow's weather."""
        return """How might tomorrow's weather affect my symptoms? Please:

1. Check which weather factors have tracked my symptoms so far
2. Show tomorrow's likelihood for hot flashes, poor sleep, low mood and headaches
3. List any weather alerts I should know about
4. Suggest simple ways to prepare tonight"""
