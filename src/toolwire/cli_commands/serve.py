"""``toolwire serve`` — run a tool server over stdio."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from toolwire.cli_commands._output import err_console


@click.command()
@click.argument("reference", required=False)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML server config.",
)
@click.option("--name", default=None, help="Server name reported by initialize.")
@click.option("--server-version", default=None, help="Server version reported by initialize.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="stderr log level.",
)
@click.option("--telemetry", is_flag=True, help="Enable tracing.")
def serve(
    reference: str | None,
    config_path: str | None,
    name: str | None,
    server_version: str | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve the tools at REFERENCE ('module:attribute') on stdin/stdout.

    REFERENCE overrides the ``tools`` entry of the config file.
    """
    from toolwire.config import ConfigError, ConfigLoader, ServerConfig, build_server
    from toolwire.protocol.dispatcher import Dispatcher
    from toolwire.protocol.loop import ServerLoop
    from toolwire.tools.errors import ToolError
    from toolwire.utils.log import configure_logging

    try:
        config = ConfigLoader(Path(config_path)).load() if config_path else ServerConfig()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    overrides = {
        "tools": reference,
        "name": name,
        "version": server_version,
        "log_level": log_level.upper() if log_level else None,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    if telemetry:
        config.telemetry = config.telemetry.model_copy(update={"enabled": True})

    if config.tools is None:
        err_console.print("[red]No tools given:[/red] pass REFERENCE or set 'tools' in the config.")
        sys.exit(2)

    configure_logging(config.log_level)

    if config.telemetry.enabled:
        from toolwire.utils.telemetry import configure_telemetry

        configure_telemetry(
            service_name=config.name,
            otlp_endpoint=config.telemetry.otlp_endpoint,
        )

    try:
        server = build_server(config)
    except (ConfigError, ToolError) as exc:
        err_console.print(f"[red]Startup error:[/red] {exc}")
        sys.exit(1)

    ServerLoop(Dispatcher(server), max_read_errors=config.max_read_errors).run()
