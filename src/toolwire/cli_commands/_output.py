"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
# stdout belongs to the protocol stream while serving.
err_console = Console(stderr=True)


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print a ``tools/list`` payload as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            _format_parameters(schema),
        )

    console.print(table)


def print_tools_json(tools: list[dict[str, Any]]) -> None:
    console.print_json(json.dumps({"tools": tools}, default=str))


def _format_parameters(schema: dict[str, Any]) -> str:
    parts: list[str] = []
    for name, prop in schema.get("properties", {}).items():
        marker = "" if prop.get("required") else "?"
        parts.append(f"{name}{marker}: {prop.get('type', '?')}")
    return ", ".join(parts) or "-"


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
