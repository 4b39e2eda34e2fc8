"""``toolwire tools`` — inspect the tools a server would expose."""

from __future__ import annotations

import sys

import click

from toolwire.cli_commands._output import console, err_console, print_tools_json, print_tools_table


@click.group()
def tools() -> None:
    """Inspect tool registries."""


@tools.command("list")
@click.argument("reference")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON.")
def list_cmd(reference: str, as_json: bool) -> None:
    """List the tools found at REFERENCE ('module:attribute')."""
    from toolwire.config import ConfigError, load_registry
    from toolwire.tools.errors import ToolError

    try:
        registry = load_registry(reference)
    except (ConfigError, ToolError) as exc:
        err_console.print(f"[red]Cannot load tools:[/red] {exc}")
        sys.exit(1)

    listing = registry.list_tools()
    if as_json:
        print_tools_json(listing)
        return

    if not listing:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(listing)
