"""MCP Resources for inspecting the engine's rule thresholds."""

from __future__ import annotations

import json

from fastmcp import FastMCP

from hiec.domains.health.domain_logic import thresholds


def register_threshold_resources(mcp: FastMCP) -> None:
    """Register the read-only thresholds resource on the MCP server."""

    @mcp.resource("thresholds://health/engine")
    def engine_thresholds_resource() -> str:
        """Every gate, threshold and bonus the insight engine applies."""
        return json.dumps(
            {
                "domain": "personal_health",
                "thresholds": thresholds.as_dict(),
            },
            indent=2,
        )
