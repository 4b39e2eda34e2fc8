"""Server configuration — YAML loading and wiring.

A config file looks like::

    name: calc
    version: 1.2.0
    tools: mypackage.tools:registry
    initialize: mypackage.tools:warm_up
    log_level: DEBUG
    telemetry:
      enabled: true
"""

from __future__ import annotations

import importlib
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from toolwire import __version__
from toolwire.protocol.constants import LATEST_PROTOCOL_VERSION
from toolwire.protocol.server import Server
from toolwire.tools.models import ToolDefinition
from toolwire.tools.registry import ToolRegistry


class ConfigError(Exception):
    """Raised when a config file or an import reference cannot be loaded."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Everything needed to start a server."""

    name: str = "toolwire"
    version: str = __version__
    protocol_version: str = LATEST_PROTOCOL_VERSION
    tools: str | None = Field(default=None, description="Import reference 'module:attribute'.")
    initialize: str | None = Field(default=None, description="Import reference to the init callback.")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    max_read_errors: int = Field(default=16, ge=1)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class ConfigLoader:
    """Load and validate a YAML config file into a :class:`ServerConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerConfig:
        """Read YAML, interpolate env vars, and validate.

        Raises:
            ConfigError: On read, YAML parse, or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        try:
            data: Any = yaml.safe_load(os.path.expandvars(raw))
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def resolve_reference(reference: str) -> Any:
    """Import the object named by ``"package.module:attribute"``."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Invalid reference {reference!r}; expected 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import {module_name!r}: {exc}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"{module_name!r} has no attribute {attr_path!r}") from exc
    return obj


def load_registry(reference: str | None) -> ToolRegistry:
    """Build a registry from a reference to a registry, a tool list, or a factory.

    A callable target (other than a :class:`ToolDefinition`) is called with
    no arguments and its return value used.
    """
    if reference is None:
        return ToolRegistry()
    target = resolve_reference(reference)
    if callable(target) and not isinstance(target, (ToolRegistry, ToolDefinition)):
        target = target()
    if isinstance(target, ToolRegistry):
        return target
    if isinstance(target, ToolDefinition):
        return ToolRegistry([target])
    if isinstance(target, Iterable):
        items = list(target)
        bad = [item for item in items if not isinstance(item, ToolDefinition)]
        if bad:
            raise ConfigError(f"{reference!r} contains non-tool entries: {bad!r}")
        return ToolRegistry(items)
    raise ConfigError(f"{reference!r} is not a ToolRegistry or a collection of tools")


def build_server(config: ServerConfig, **hooks: Any) -> Server:
    """Wire a :class:`Server` from *config*; extra keyword args are hooks."""
    init = resolve_reference(config.initialize) if config.initialize else None
    if init is not None and not callable(init):
        raise ConfigError(f"initialize reference {config.initialize!r} is not callable")
    return Server(
        name=config.name,
        version=config.version,
        protocol_version=config.protocol_version,
        tools=load_registry(config.tools),
        initialize=init,
        **hooks,
    )
