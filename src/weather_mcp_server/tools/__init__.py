"""Tool registration helpers for the weather MCP server."""

from __future__ import annotations

from weather_mcp.tools import ToolDefinition
from weather_mcp_server.tools.weather import (
    current_weather_tool,
    weather_forecast_tool,
)


def build_tools() -> list[ToolDefinition]:
    """Instantiate all tool definitions."""
    return [
        current_weather_tool(),
        weather_forecast_tool(),
    ]
