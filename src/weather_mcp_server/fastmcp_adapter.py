"""Adapters for exposing weather MCP tools via FastMCP."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import ImageContent, TextContent

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.errors import MCPError
from weather_mcp.registry import ToolRegistry
from weather_mcp.tools import ToolDefinition
from weather_mcp_server.tools import build_tools


def _to_mcp_content(block: dict[str, Any]) -> TextContent | ImageContent:
    if block["type"] == "image":
        return ImageContent.model_validate(block)
    return TextContent.model_validate(block)


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    def __init__(self, definition: ToolDefinition, dispatcher: Dispatcher) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.schema.to_json_schema(),
            tags=set(),
        )
        self._definition = definition
        self._dispatcher = dispatcher

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Validate arguments and delegate to the wrapped handler."""
        try:
            result = await self._dispatcher.call_tool(self._definition.name, arguments)
        except MCPError as error:
            raise ToolError(error.message) from None
        return ToolResult(
            content=[_to_mcp_content(block) for block in result["content"]],
            structured_content=result.get("structuredContent"),
        )


def to_fastmcp_tools(dispatcher: Dispatcher) -> list[Tool]:
    """Convert registered tool definitions into FastMCP-compatible tools."""
    registry = dispatcher.registry
    return [
        ToolDefinitionAdapter(registry.lookup(name), dispatcher)
        for name in registry.available_tools()
    ]


def build_fastmcp_app(
    tool_definitions: Sequence[ToolDefinition] | None = None,
    *,
    name: str = "Weather MCP Server",
    version: str = "1.0.0",
) -> tuple[FastMCP, Dispatcher]:
    """Create a FastMCP server instance with the weather tools registered."""
    registry = ToolRegistry()
    registry.register_tools(
        *(build_tools() if tool_definitions is None else tool_definitions)
    )
    dispatcher = Dispatcher(registry, server_name=name, server_version=version)
    app = FastMCP(
        name=name,
        version=version,
        instructions="Placeholder weather information exposed over the Model Context Protocol.",
    )
    for tool in to_fastmcp_tools(dispatcher):
        app.add_tool(tool)
    return app, dispatcher
