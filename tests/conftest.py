"""Shared fixtures: sample tools, a server, and an in-memory transport."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

from toolwire.protocol.server import Server
from toolwire.tools.models import Parameter, ParamType, ToolDefinition
from toolwire.tools.registry import ToolRegistry


class MemoryTransport:
    """Feeds fixed input lines and records every output line.

    ``write_line`` yields to the event loop halfway through each line, so
    unsynchronised writers would interleave inside ``raw``.
    """

    def __init__(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.raw = ""

    async def read_line(self) -> str | None:
        await asyncio.sleep(0)
        if not self._lines:
            return None
        return self._lines.pop(0)

    async def write_line(self, line: str) -> None:
        half = len(line) // 2
        self.raw += line[:half]
        await asyncio.sleep(0)
        self.raw += line[half:] + "\n"

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.raw.splitlines() if line]


def _add(args: dict[str, Any]) -> list[Any]:
    return [args["a"] + args["b"]]


def _boom(args: dict[str, Any]) -> list[Any]:
    raise ValueError("kaboom")


async def _echo_after(args: dict[str, Any]) -> list[Any]:
    await asyncio.sleep(args["delay"])
    return [args["label"]]


@pytest.fixture
def add_tool() -> ToolDefinition:
    return ToolDefinition(
        name="add",
        doc="Add two numbers.",
        parameters=(
            Parameter(name="a", type=ParamType.NUMBER, doc="left"),
            Parameter(name="b", type=ParamType.NUMBER, doc="right"),
        ),
        handler=_add,
    )


@pytest.fixture
def boom_tool() -> ToolDefinition:
    return ToolDefinition(name="boom", doc="Always fails.", handler=_boom)


@pytest.fixture
def slow_tool() -> ToolDefinition:
    return ToolDefinition(
        name="echo_after",
        doc="Echo a label after a delay.",
        parameters=(
            Parameter(name="label"),
            Parameter(name="delay", type=ParamType.NUMBER, default=0),
        ),
        handler=_echo_after,
    )


@pytest.fixture
def registry(add_tool: ToolDefinition, boom_tool: ToolDefinition, slow_tool: ToolDefinition) -> ToolRegistry:
    return ToolRegistry([add_tool, boom_tool, slow_tool])


@pytest.fixture
def server(registry: ToolRegistry) -> Server:
    return Server(name="test-server", version="9.9.9", tools=registry)


@pytest.fixture
def make_transport():
    def _make(*messages: dict[str, Any] | str) -> MemoryTransport:
        lines = [m if isinstance(m, str) else json.dumps(m) for m in messages]
        return MemoryTransport(lines)

    return _make
