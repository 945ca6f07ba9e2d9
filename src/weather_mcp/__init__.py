"""weather_mcp package initialization."""

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.registry import DuplicateToolError, ToolRegistry
from weather_mcp.schema import Schema, validate
from weather_mcp.tools import ToolDefinition, ToolResult

__all__ = [
    "Dispatcher",
    "DuplicateToolError",
    "Schema",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "validate",
]
