"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from weather_mcp.dispatcher import Dispatcher
from weather_mcp.registry import ToolRegistry
from weather_mcp_server.tools import build_tools
from weather_mcp_server.transport import StatelessHTTPTransport, create_app


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def registry() -> ToolRegistry:
    """Registry holding the bundled weather tools."""
    tools = ToolRegistry()
    tools.register_tools(*build_tools())
    return tools


@pytest.fixture()
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    """Dispatcher over the weather registry."""
    return Dispatcher(registry)


@pytest.fixture()
async def http_client(dispatcher: Dispatcher) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client bound in-process to the MCP endpoint."""
    app = create_app(StatelessHTTPTransport(dispatcher))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client
