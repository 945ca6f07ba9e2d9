"""Tool registry.

Tools are registered once at startup and looked up by name for every call. The
registry is never mutated while requests are being served, so concurrent reads
need no locking.
"""

from __future__ import annotations

from typing import Any

from weather_mcp.tools import ToolDefinition


class DuplicateToolError(ValueError):
    """A tool with the same name is already registered."""


class ToolNotFoundError(KeyError):
    """No tool is registered under the requested name."""


class ToolRegistry:
    """In-memory mapping from tool name to :class:`ToolDefinition`."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolDefinition] = {}

    def __contains__(self, name: object) -> bool:
        """Return whether a tool is registered under ``name``."""
        return name in self._tools

    def __len__(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool.

        Args:
            tool: Tool definition to register.

        Raises:
            DuplicateToolError: If a tool with the same name is already registered.

        """
        if tool.name in self._tools:
            raise DuplicateToolError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def lookup(self, name: str) -> ToolDefinition:
        """Return the tool registered under ``name``.

        Raises:
            ToolNotFoundError: If the tool name is not registered.

        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(f"Tool '{name}' is not registered") from None

    def get(self, name: str) -> ToolDefinition | None:
        """Return the tool registered under ``name`` or ``None``."""
        return self._tools.get(name)

    def available_tools(self) -> list[str]:
        """List the names of registered tools.

        Returns:
            Sorted list of tool names.

        """
        return sorted(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """MCP tool descriptors in name order."""
        return [self._tools[name].descriptor() for name in self.available_tools()]

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery.

        Returns:
            Mapping of tool names to their metadata.

        """
        return {name: tool.metadata() for name, tool in self._tools.items()}
