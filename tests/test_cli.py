"""CLI behavior smoke tests."""

from __future__ import annotations

import json

from pytest import CaptureFixture

from weather_mcp import cli


def test_cli_calls_tool(capsys: CaptureFixture[str]) -> None:
    """Calling a tool prints its success envelope."""
    # Arrange
    argv = ["get-current-weather-by-city", "--params", '{"city": "London"}']

    # Act
    exit_code = cli.main(argv)

    # Assert
    assert exit_code == 0
    parsed = json.loads(capsys.readouterr().out)
    assert parsed["id"] == 1
    assert "London" in parsed["result"]["content"][0]["text"]


def test_cli_reports_errors(capsys: CaptureFixture[str]) -> None:
    """Error envelopes are printed and signalled through the exit code."""
    # Act
    exit_code = cli.main(["bogus-tool", "--id", "req-2"])

    # Assert
    assert exit_code == 1
    parsed = json.loads(capsys.readouterr().out)
    assert parsed["id"] == "req-2"
    assert parsed["error"]["code"] == -32601


def test_cli_rejects_malformed_params(capsys: CaptureFixture[str]) -> None:
    """Unparseable --params JSON yields a parse error envelope."""
    exit_code = cli.main(["get-current-weather-by-city", "--params", "{city"])

    assert exit_code == 1
    assert json.loads(capsys.readouterr().out)["error"]["code"] == -32700


def test_cli_catalog_flag(capsys: CaptureFixture[str]) -> None:
    """Catalog flag should print tool discovery metadata."""
    # Arrange
    argv: list[str] = ["--catalog"]

    # Act
    exit_code = cli.main(argv)

    # Assert
    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert "get-weather-forecast-by-city" in catalog
    assert catalog["get-weather-forecast-by-city"]["description"]


def test_cli_parses_negative_ids_as_integers(capsys: CaptureFixture[str]) -> None:
    """Numeric ids, including negative ones, are sent as JSON integers."""
    exit_code = cli.main(["ping", "--id", "-1"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["id"] == -1


def test_cli_uses_the_server_registry(capsys: CaptureFixture[str]) -> None:
    """The CLI lists exactly the tools the server registers."""
    from weather_mcp_server.main import build_registry

    exit_code = cli.main(["--catalog"])

    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert sorted(catalog) == build_registry().available_tools()
