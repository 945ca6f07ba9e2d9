"""Placeholder weather tools."""

from __future__ import annotations

import json
from typing import Any

from weather_mcp.schema import Schema, StringField
from weather_mcp.tools import ToolDefinition, ToolResult

CITY_SCHEMA = Schema(fields={"city": StringField(description="Name of the city")})


def _json_result(payload: dict[str, Any]) -> ToolResult:
    return ToolResult.text(json.dumps(payload, indent=2), structured_content=payload)


def current_weather(city: str) -> dict[str, Any]:
    """Current conditions for ``city``."""
    return {
        "cityName": city,
        "currentConditions": "Sun",
        "temperature": 9,
        "windSpeed": 17,
        "windDirection": "South easterly",
        "windChillFactor": 7,
    }


def weather_forecast(city: str) -> dict[str, Any]:
    """Two-period forecast for ``city``."""
    return {
        "cityName": city,
        "forecast": [
            {
                "conditions": "Sun",
                "temperature": 12,
                "windChillFactor": 11,
                "windDirection": "Easterly",
                "windSpeed": 8,
            },
            {
                "conditions": "Cloud",
                "temperature": 19,
                "windChillFactor": 16,
                "windDirection": "Southerly",
                "windSpeed": 13,
            },
        ],
    }


def current_weather_tool() -> ToolDefinition:
    """Create the get-current-weather-by-city tool definition."""

    async def handler(params: dict[str, Any]) -> ToolResult:
        return _json_result(current_weather(params["city"]))

    return ToolDefinition(
        name="get-current-weather-by-city",
        description="Get current weather information by city",
        schema=CITY_SCHEMA,
        handler=handler,
    )


def weather_forecast_tool() -> ToolDefinition:
    """Create the get-weather-forecast-by-city tool definition."""

    async def handler(params: dict[str, Any]) -> ToolResult:
        return _json_result(weather_forecast(params["city"]))

    return ToolDefinition(
        name="get-weather-forecast-by-city",
        description="Get weather forecast information by city",
        schema=CITY_SCHEMA,
        handler=handler,
    )
