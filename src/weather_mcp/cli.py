"""Command-line interface for calling tools in-process, without HTTP."""

from __future__ import annotations

import argparse
import json

import anyio

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.errors import ParseError
from weather_mcp.protocol import failure, parse_request
from weather_mcp.registry import ToolRegistry


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(description="Call weather MCP tools locally.")
    parser.add_argument(
        "method",
        nargs="?",
        help="RPC method to call: a tool name or a protocol method like tools/list.",
    )
    parser.add_argument(
        "--params",
        default="{}",
        help="Request params as a JSON document.",
    )
    parser.add_argument("--id", default="1", help="Request id to send.")
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON.",
    )
    return parser


def default_registry() -> ToolRegistry:
    """Registry holding the bundled weather tools, built as the server builds it."""
    from weather_mcp_server.main import build_registry

    return build_registry()


def main(argv: list[str] | None = None, registry: ToolRegistry | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    registry = registry if registry is not None else default_registry()

    if args.catalog:
        print(json.dumps(registry.to_catalog(), indent=2))
        return 0
    if not args.method:
        parser.error("a method is required unless --catalog is given")

    request_id: int | str
    try:
        request_id = int(args.id)
    except ValueError:
        request_id = args.id
    try:
        params = json.loads(args.params)
    except (ValueError, RecursionError) as error:
        response = failure(request_id, ParseError(f"Parse error: {error}"))
    else:
        request = parse_request(
            {"jsonrpc": "2.0", "id": request_id, "method": args.method, "params": params}
        )
        response = anyio.run(Dispatcher(registry).dispatch, request)
        if response is None:
            return 0

    print(json.dumps(response.to_dict(), indent=2))
    return 1 if response.is_error else 0


if __name__ == "__main__":
    raise SystemExit(main())
