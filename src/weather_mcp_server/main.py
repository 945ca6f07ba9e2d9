"""Entry point for the weather MCP server."""

from __future__ import annotations

import argparse
import json

import uvicorn
from starlette.applications import Starlette

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.registry import ToolRegistry
from weather_mcp_server.fastmcp_adapter import build_fastmcp_app
from weather_mcp_server.logging import configure_logging, get_logger
from weather_mcp_server.settings import Settings, load_settings
from weather_mcp_server.tools import build_tools
from weather_mcp_server.transport import StatelessHTTPTransport, create_app

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server."""
    parser = argparse.ArgumentParser(description="Weather MCP server")
    parser.add_argument("--host", help="Interface to bind")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--path", help="HTTP path serving MCP requests")
    parser.add_argument(
        "--fastmcp",
        action="store_true",
        help="Serve through FastMCP's streamable HTTP transport instead",
    )
    parser.add_argument("--catalog", action="store_true", help="Print the tool catalog")
    return parser


def build_registry() -> ToolRegistry:
    """Register every bundled tool; duplicate names abort startup."""
    registry = ToolRegistry()
    registry.register_tools(*build_tools())
    return registry


def build_app(settings: Settings, registry: ToolRegistry) -> Starlette:
    """Wire dispatcher and transport into an ASGI application."""
    dispatcher = Dispatcher(
        registry,
        server_name=settings.server_name,
        server_version=settings.server_version,
        handler_timeout=settings.handler_timeout_seconds,
    )
    transport = StatelessHTTPTransport(
        dispatcher, parse_error_status=settings.parse_error_status
    )
    return create_app(transport, settings.path)


def main(argv: list[str] | None = None) -> int:
    """Load settings, register tools and serve HTTP until interrupted."""
    args = build_parser().parse_args(argv)
    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("path", args.path))
        if value is not None
    }
    settings = load_settings(**overrides)
    configure_logging(settings.log_level, json_output=settings.log_json)

    registry = build_registry()
    if args.catalog:
        print(json.dumps(registry.to_catalog(), indent=2))
        return 0

    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        path=settings.path,
        engine="fastmcp" if args.fastmcp else "native",
        tools=registry.available_tools(),
    )
    if args.fastmcp:
        app, _ = build_fastmcp_app(
            build_tools(), name=settings.server_name, version=settings.server_version
        )
        app.run(
            transport="http",
            host=settings.host,
            port=settings.port,
            path=settings.path,
            stateless_http=True,
        )
        return 0

    uvicorn.run(
        build_app(settings, registry),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
