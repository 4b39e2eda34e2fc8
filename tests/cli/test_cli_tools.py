"""Tests for ``toolwire tools`` and the CLI entrypoint."""

from __future__ import annotations

import io
from unittest.mock import patch

from click.testing import CliRunner
from rich.console import Console

from toolwire.cli import main


class TestToolsList:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "toolwire.demo:tools"])
        assert result.exit_code == 0
        assert "add" in result.output
        assert "greet" in result.output
        assert "greeting?" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "toolwire.demo:tools", "--json"])
        assert result.exit_code == 0
        assert '"inputSchema"' in result.output
        assert '"required"' in result.output

    def test_load_error(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "not-a-reference"])
        assert result.exit_code == 1
        assert "Cannot load tools" in result.output

    def test_load_error_goes_to_error_console(self) -> None:
        errors = io.StringIO()
        with patch("toolwire.cli_commands.tools.err_console", Console(file=errors)):
            result = CliRunner().invoke(main, ["tools", "list", "not-a-reference"])
        assert result.exit_code == 1
        assert "Cannot load tools" in errors.getvalue()
        assert "Cannot load tools" not in result.output


class TestVersion:
    def test_version_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
