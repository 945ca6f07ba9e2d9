"""Model Context Protocol server for placeholder weather data."""

from weather_mcp_server.settings import Settings, load_settings
from weather_mcp_server.transport import StatelessHTTPTransport, create_app

__all__ = [
    "Settings",
    "StatelessHTTPTransport",
    "create_app",
    "load_settings",
]
