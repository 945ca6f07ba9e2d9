"""Tests for the tool registry."""

from __future__ import annotations

import pytest

from weather_mcp.registry import DuplicateToolError, ToolNotFoundError, ToolRegistry
from weather_mcp.schema import Schema
from weather_mcp.tools import ToolDefinition, ToolResult
from weather_mcp_server.tools import build_tools


def _echo_tool(name: str = "echo") -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description="Echo tool used in tests.",
        schema=Schema(),
        handler=lambda _: ToolResult.text("ok"),
    )


class TestToolRegistry:
    """Behavioral coverage for ToolRegistry."""

    def test_register_and_list_tools(self) -> None:
        """Registers a tool and ensures it appears in the catalog."""
        # Arrange
        registry = ToolRegistry()
        echo = _echo_tool()

        # Act
        registry.register_tool(echo)

        # Assert
        assert registry.available_tools() == ["echo"]
        catalog = registry.to_catalog()
        assert "echo" in catalog
        assert catalog["echo"]["description"] == echo.description

    def test_prevents_duplicate_tool_names(self) -> None:
        """Duplicate tool registrations raise a ValueError."""
        # Arrange
        registry = ToolRegistry()
        registry.register_tool(_echo_tool())

        # Act / Assert
        with pytest.raises(DuplicateToolError):
            registry.register_tool(_echo_tool())
        with pytest.raises(ValueError):
            registry.register_tools(_echo_tool("other"), _echo_tool("other"))

    def test_lookup_returns_registered_definition(self) -> None:
        """Every registered name resolves to the exact definition registered."""
        # Arrange
        registry = ToolRegistry()
        tools = build_tools()
        registry.register_tools(*tools)

        # Act / Assert
        for tool in tools:
            assert registry.lookup(tool.name) is tool
            assert tool.name in registry
        assert len(registry) == len(tools)

    def test_lookup_unknown_tool_errors(self) -> None:
        """Unknown tool lookups raise a KeyError."""
        # Arrange
        registry = ToolRegistry()

        # Act / Assert
        with pytest.raises(KeyError):
            registry.lookup("missing")
        with pytest.raises(ToolNotFoundError):
            registry.lookup("missing")
        assert registry.get("missing") is None

    def test_list_tools_uses_mcp_descriptor_shape(self) -> None:
        """tools/list descriptors carry name, description and inputSchema."""
        # Arrange
        registry = ToolRegistry()
        registry.register_tools(*build_tools())

        # Act
        descriptors = registry.list_tools()

        # Assert
        assert [item["name"] for item in descriptors] == [
            "get-current-weather-by-city",
            "get-weather-forecast-by-city",
        ]
        assert descriptors[0]["inputSchema"]["required"] == ["city"]
        assert descriptors[0]["inputSchema"]["properties"]["city"] == {
            "type": "string",
            "description": "Name of the city",
        }
