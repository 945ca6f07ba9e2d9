"""Runtime configuration, read once at startup."""

from __future__ import annotations

import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings.

    Values come from ``WEATHER_MCP_*`` environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_MCP_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    server_name: str = "Weather MCP Server"
    server_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)
    path: str = "/mcp"
    log_level: str = "INFO"
    log_json: bool = True
    # HTTP status for bodies that are not a JSON-RPC request: 400 or 500.
    parse_error_status: int = 400
    handler_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator("parse_error_status")
    @classmethod
    def _check_parse_error_status(cls, value: int) -> int:
        if value not in (400, 500):
            raise ValueError("parse_error_status must be 400 or 500")
        return value

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


def load_settings(**overrides: object) -> Settings:
    """Read settings from the environment, letting explicit values win.

    A bare ``PORT`` variable is honoured when ``WEATHER_MCP_PORT`` is unset.
    """
    if (
        "port" not in overrides
        and "WEATHER_MCP_PORT" not in os.environ
        and os.environ.get("PORT")
    ):
        overrides["port"] = os.environ["PORT"]
    return Settings(**overrides)
