"""JSON-RPC 2.0 request and response envelopes."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

from weather_mcp.errors import InvalidRequestError, MCPError

JSONRPC_VERSION = "2.0"

RequestId = Union[StrictStr, StrictInt, None]


class RpcRequest(BaseModel):
    """Inbound call parsed from an HTTP body."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    jsonrpc: Optional[Literal["2.0"]] = None
    id: RequestId = None
    method: StrictStr
    params: Any = None

    @property
    def is_notification(self) -> bool:
        """True when the client sent no ``id`` member at all."""
        return "id" not in self.model_fields_set


class RpcError(BaseModel):
    """The ``error`` member of a failed response."""

    code: int
    message: str
    data: Any = None


class RpcResponse(BaseModel):
    """Outbound envelope holding exactly one of ``result`` or ``error``."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[RpcError] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> RpcResponse:
        if (self.result is None) == (self.error is None):
            raise ValueError("response must carry exactly one of result or error")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with ``id`` always present, even when null."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result
        return payload


def success(request_id: RequestId, result: dict[str, Any]) -> RpcResponse:
    """Build a success envelope."""
    return RpcResponse(id=request_id, result=result)


def failure(request_id: RequestId, error: MCPError) -> RpcResponse:
    """Build an error envelope from an :class:`MCPError`."""
    return RpcResponse(id=request_id, error=RpcError(**error.to_dict()))


def recover_id(payload: Any) -> RequestId:
    """Best-effort ``id`` from a payload that failed envelope validation."""
    if isinstance(payload, dict):
        candidate = payload.get("id")
        if isinstance(candidate, str) or (
            isinstance(candidate, int) and not isinstance(candidate, bool)
        ):
            return candidate
    return None


def parse_request(payload: Any) -> RpcRequest:
    """Validate a decoded JSON body as a request envelope.

    Raises:
        InvalidRequestError: If the payload is not a JSON-RPC request object.

    """
    if not isinstance(payload, dict):
        raise InvalidRequestError(
            "Invalid Request: expected a JSON object",
            {"received": type(payload).__name__},
        )
    try:
        return RpcRequest.model_validate(payload)
    except ValidationError as error:
        problems = [
            f"{'.'.join(str(part) for part in item['loc']) or 'request'}: {item['msg']}"
            for item in error.errors()
        ]
        raise InvalidRequestError("Invalid Request", problems) from error
