"""JSON-RPC error types for MCP dispatch."""

from __future__ import annotations

from typing import ClassVar, TypedDict

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
METHOD_NOT_ALLOWED = -32000


class MCPErrorPayload(TypedDict, total=False):
    """Structured JSON payload carried in an error envelope."""

    code: int
    message: str
    data: object


class MCPError(Exception):
    """JSON-RPC error carrying a code, a client-safe message and optional data."""

    default_code: ClassVar[int] = INTERNAL_ERROR
    default_message: ClassVar[str] = "Internal error"

    def __init__(
        self,
        message: str | None = None,
        data: object | None = None,
        *,
        code: int | None = None,
    ) -> None:
        """Create an error, falling back to the class defaults."""
        self.code = self.default_code if code is None else code
        self.message = self.default_message if message is None else message
        self.data = data
        super().__init__(self.message)

    def to_dict(self) -> MCPErrorPayload:
        """Return the ``error`` member of a JSON-RPC response."""
        payload: MCPErrorPayload = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class ParseError(MCPError):
    """Request body is not valid JSON."""

    default_code = PARSE_ERROR
    default_message = "Parse error"


class InvalidRequestError(MCPError):
    """Request body is JSON but not a JSON-RPC request object."""

    default_code = INVALID_REQUEST
    default_message = "Invalid Request"


class MethodNotFoundError(MCPError):
    """RPC method names no built-in and no registered tool."""

    default_code = METHOD_NOT_FOUND
    default_message = "Method not found"


class InvalidParamsError(MCPError):
    """Params failed validation against the tool schema."""

    default_code = INVALID_PARAMS
    default_message = "Invalid params"


class InternalError(MCPError):
    """A handler faulted or its result could not be packaged."""

    default_code = INTERNAL_ERROR
    default_message = "Internal error"


class MethodNotAllowedError(MCPError):
    """HTTP verb other than POST hit the endpoint."""

    default_code = METHOD_NOT_ALLOWED
    default_message = "Method not allowed."

