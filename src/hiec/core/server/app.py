"""Health Insight MCP Server application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from hiec.core.config.settings import get_settings
from hiec.domains.health.connectors import (
    EnvironmentalDataProvider,
    SymptomDataProvider,
)
from hiec.domains.health.connectors.providers import (
    MockEnvironmentalDataProvider,
    MockSymptomDataProvider,
)
from hiec.domains.health.prompts.insight_prompts import register_insight_prompts
from hiec.domains.health.resources.thresholds import register_threshold_resources
from hiec.domains.health.tools.environment_tools import register_environment_tools
from hiec.domains.health.tools.insight_tools import register_insight_tools

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"


def create_app(
    *,
    symptom_provider_override: SymptomDataProvider | None = None,
    environment_provider_override: EnvironmentalDataProvider | None = None,
) -> FastMCP:
    """Create and configure the Health Insight MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Initializes the diary and weather data providers (mock for now)
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        "Health Insight",
        instructions=(
            "Personal health insight server. Computes a health score, "
            "week-over-week symptom trends and insights from a symptom diary, "
            "and relates symptoms to weather and air quality with next-day "
            "forecasts and advisories."
        ),
    )

    # --- Initialize data providers ---
    if symptom_provider_override is not None:
        symptom_provider = symptom_provider_override
    else:
        symptom_provider = MockSymptomDataProvider(
            post_menopausal=settings.profile_post_menopausal,
        )
        logger.info("Using mock symptom diary provider")

    if environment_provider_override is not None:
        environment_provider = environment_provider_override
    else:
        environment_provider = MockEnvironmentalDataProvider()
        logger.info("Using mock environmental data provider")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "Health Insight",
            "version": SERVER_VERSION,
            "symptom_data_source": symptom_provider.data_source,
            "environment_data_source": environment_provider.data_source,
            "default_period": settings.default_period,
        }

    register_insight_tools(
        server,
        symptom_provider,
        default_period=settings.default_period,
    )
    logger.info("Health insight tools registered")

    register_environment_tools(
        server,
        symptom_provider,
        environment_provider,
        history_days=settings.environment_history_days,
    )
    logger.info("Environmental analysis tools registered")

    # --- Register resources ---
    register_threshold_resources(server)

    # --- Register prompts ---
    register_insight_prompts(server)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
