"""Tests for ``toolwire serve``."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest
from click.testing import CliRunner

from toolwire.cli import main


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("toolwire")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _input(*messages: dict[str, Any]) -> str:
    return "".join(json.dumps(m) + "\n" for m in messages)


def _protocol_lines(output: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


class TestServe:
    def test_serves_until_end_of_input(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "toolwire.demo:tools", "--name", "demo", "--server-version", "1.2.3"],
            input=_input(
                {"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
                {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "add", "arguments": {"a": 2, "b": 5}}},
                {"jsonrpc": "2.0", "method": "notifications/initialized"},
            ),
        )

        assert result.exit_code == 0
        by_id = {m["id"]: m for m in _protocol_lines(result.output)}
        assert set(by_id) == {1, 2}
        assert [t["name"] for t in by_id[1]["result"]["tools"]] == ["add", "greet", "fail"]
        assert by_id[2]["result"]["content"] == [{"type": "text", "text": "7"}]

    def test_initialize_reports_overrides(self) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "toolwire.demo:tools", "--name", "demo", "--server-version", "1.2.3"],
            input=_input({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}),
        )

        assert result.exit_code == 0
        messages = _protocol_lines(result.output)
        assert messages[0]["result"]["serverInfo"] == {"name": "demo", "version": "1.2.3"}
        assert messages[1]["method"] == "notifications/initialized"

    def test_config_file(self, tmp_path) -> None:
        config = tmp_path / "server.yaml"
        config.write_text("name: from-config\ntools: toolwire.demo:tools\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["serve", "--config", str(config)],
            input=_input({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}),
        )

        assert result.exit_code == 0
        assert _protocol_lines(result.output)[0]["result"]["serverInfo"]["name"] == "from-config"

    def test_without_tools_reference(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve"], input="")
        assert result.exit_code == 2
        assert "No tools given" in result.output

    def test_bad_reference(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "toolwire_missing_module:tools"], input="")
        assert result.exit_code == 1
        assert "Startup error" in result.output

    def test_bad_config(self, tmp_path) -> None:
        config = tmp_path / "server.yaml"
        config.write_text("log_level: LOUD\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--config", str(config)], input="")
        assert result.exit_code == 1
        assert "Config error" in result.output
