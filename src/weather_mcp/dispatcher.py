"""Dispatch of parsed RPC requests to registered tools.

The dispatcher turns one :class:`RpcRequest` into one :class:`RpcResponse`. Protocol
built-ins (``initialize``, ``ping``, ``tools/list``, ``tools/call``) are resolved
first; any other method name is looked up in the tool registry. Every failure is
classified into a JSON-RPC error and returned, never raised.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable

import anyio
import structlog
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from weather_mcp.errors import (
    InternalError,
    InvalidParamsError,
    MCPError,
    MethodNotFoundError,
)
from weather_mcp.protocol import RpcRequest, RpcResponse, failure, success
from weather_mcp.registry import ToolRegistry
from weather_mcp.schema import SchemaValidationError
from weather_mcp.tools import ToolDefinition, ToolResult

logger = structlog.get_logger(__name__)

SUPPORTED_PROTOCOL_VERSIONS = ("2025-06-18", "2025-03-26", "2024-11-05")
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]


class _ToolCallParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    arguments: dict[str, Any] = Field(default_factory=dict)


class Dispatcher:
    """Resolve, validate and invoke tool calls.

    Args:
        registry: Tools available to clients. Must not change once serving starts.
        server_name: Name reported by ``initialize``.
        server_version: Version reported by ``initialize``.
        instructions: Optional usage hint reported by ``initialize``.
        handler_timeout: Seconds a single handler may run before the call is
            reported as an internal error. ``None`` disables the limit.
            A plain callable that overruns is abandoned in its worker thread:
            the caller gets its error promptly while the thread runs to
            completion and its result is discarded.

    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = "Weather MCP Server",
        server_version: str = "1.0.0",
        instructions: str | None = None,
        handler_timeout: float | None = None,
    ) -> None:
        """Initialize the dispatcher with its registry and server identity."""
        self.registry = registry
        self.server_name = server_name
        self.server_version = server_version
        self.instructions = instructions
        self.handler_timeout = handler_timeout
        self._builtins: dict[str, Callable[[Any], Awaitable[dict[str, Any]]]] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool_method,
        }

    async def dispatch(self, request: RpcRequest) -> RpcResponse | None:
        """Produce the response for ``request``.

        Returns:
            The response envelope, or ``None`` for notifications, which get no
            response.

        """
        if request.method.startswith("notifications/"):
            logger.debug("mcp_notification", method=request.method)
            return None

        try:
            builtin = self._builtins.get(request.method)
            if builtin is not None:
                result = await builtin(request.params)
            else:
                result = await self.call_tool(request.method, request.params)
        except MCPError as error:
            return failure(request.id, error)
        return success(request.id, result)

    async def call_tool(self, name: str, arguments: Any) -> dict[str, Any]:
        """Validate ``arguments`` for tool ``name`` and run its handler.

        Raises:
            MethodNotFoundError: No tool is registered under ``name``.
            InvalidParamsError: The arguments do not satisfy the tool schema.
            InternalError: The handler faulted or returned an invalid result.

        """
        tool = self.registry.get(name)
        if tool is None:
            raise MethodNotFoundError(f"Method not found: {name}")

        outcome = tool.validate({} if arguments is None else arguments)
        if isinstance(outcome, SchemaValidationError):
            raise InvalidParamsError(
                f"Invalid params for '{name}': {outcome.summary()}",
                outcome.to_data(),
            )

        try:
            if self.handler_timeout is None:
                raw = await self._invoke(tool, outcome.values)
            else:
                with anyio.fail_after(self.handler_timeout):
                    raw = await self._invoke(tool, outcome.values)
            result = (
                raw if isinstance(raw, ToolResult) else ToolResult.model_validate(raw)
            )
        except Exception:
            logger.exception("tool_call_failed", tool=name)
            raise InternalError() from None
        return result.to_dict()

    async def _invoke(self, tool: ToolDefinition, params: dict[str, Any]) -> Any:
        handler = tool.handler
        if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
            getattr(handler, "__call__", None)
        ):
            return await handler(params)
        raw = await anyio.to_thread.run_sync(
            functools.partial(handler, params), abandon_on_cancel=True
        )
        if inspect.isawaitable(raw):
            return await raw
        return raw

    async def _initialize(self, params: Any) -> dict[str, Any]:
        requested = params.get("protocolVersion") if isinstance(params, dict) else None
        version = (
            requested
            if requested in SUPPORTED_PROTOCOL_VERSIONS
            else LATEST_PROTOCOL_VERSION
        )
        result: dict[str, Any] = {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self.server_name, "version": self.server_version},
        }
        if self.instructions:
            result["instructions"] = self.instructions
        return result

    async def _ping(self, _: Any) -> dict[str, Any]:
        return {}

    async def _list_tools(self, _: Any) -> dict[str, Any]:
        return {"tools": self.registry.list_tools()}

    async def _call_tool_method(self, params: Any) -> dict[str, Any]:
        try:
            call = _ToolCallParams.model_validate(params)
        except ValidationError as error:
            raise InvalidParamsError(
                "Invalid params for 'tools/call': expected {name, arguments}",
                [item["msg"] for item in error.errors()],
            ) from None
        return await self.call_tool(call.name, call.arguments)
