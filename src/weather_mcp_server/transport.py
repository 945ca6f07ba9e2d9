"""Stateless HTTP binding for the dispatcher.

One :class:`StatelessHTTPTransport` serves every caller. Each request walks
``Received -> MethodChecked -> BodyParsed -> Dispatched -> Responded``; only the
dispatch step may suspend. No session id is issued or read.
"""

from __future__ import annotations

import json
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.types import Message, Receive, Scope, Send

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.errors import (
    InternalError,
    MCPError,
    MethodNotAllowedError,
    ParseError,
)
from weather_mcp.protocol import failure, parse_request, recover_id
from weather_mcp_server.logging import get_logger

logger = get_logger(__name__)


def error_response(
    error: MCPError, status_code: int, request_id: Any = None, **headers: str
) -> JSONResponse:
    """JSON-RPC error envelope with an explicit HTTP status."""
    return JSONResponse(
        failure(request_id, error).to_dict(),
        status_code=status_code,
        headers=headers or None,
    )


class StatelessHTTPTransport:
    """ASGI application mapping HTTP requests onto :class:`Dispatcher` calls.

    Args:
        dispatcher: Dispatcher shared by all requests.
        parse_error_status: HTTP status for bodies that cannot be read as a
            JSON-RPC request. 400 by default; 500 for clients that expect it.

    """

    def __init__(self, dispatcher: Dispatcher, *, parse_error_status: int = 400) -> None:
        """Initialize the transport around a shared dispatcher."""
        self.dispatcher = dispatcher
        self.parse_error_status = parse_error_status

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response_started = False

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            response = await self.handle_request(Request(scope, receive))
            await response(scope, receive, guarded_send)
        except Exception:
            logger.exception("mcp_transport_error", path=scope.get("path"))
            if response_started:
                return
            fallback = error_response(InternalError("Internal server error"), 500)
            await fallback(scope, receive, send)

    async def handle_request(self, request: Request) -> Response:
        """Run one HTTP request through the transport state machine."""
        if request.method != "POST":
            logger.info("mcp_method_not_allowed", http_method=request.method)
            return error_response(MethodNotAllowedError(), 405, Allow="POST")

        body = await request.body()
        try:
            payload = json.loads(body)
        except (ValueError, RecursionError) as error:
            logger.info("mcp_parse_error", reason=str(error))
            return error_response(ParseError(), self.parse_error_status)

        try:
            rpc_request = parse_request(payload)
        except MCPError as error:
            logger.info("mcp_parse_error", reason=error.message, detail=error.data)
            return error_response(
                error, self.parse_error_status, recover_id(payload)
            )

        logger.info(
            "mcp_request_received",
            rpc_method=rpc_request.method,
            request_id=rpc_request.id,
        )
        rpc_response = await self.dispatcher.dispatch(rpc_request)
        if rpc_response is None:
            return Response(status_code=202)
        return JSONResponse(rpc_response.to_dict(), status_code=200)


def create_app(transport: StatelessHTTPTransport, path: str = "/mcp") -> Starlette:
    """Starlette application routing every method on ``path`` to ``transport``."""
    return Starlette(routes=[Route(path, endpoint=transport)])
