"""ToolRegistry — the immutable name-to-tool mapping built at startup."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from toolwire.protocol.errors import ToolNotFoundError
from toolwire.tools.errors import DuplicateToolError
from toolwire.tools.models import ToolDefinition


class ToolRegistry:
    """Read-only mapping of tool name to :class:`ToolDefinition`.

    Usage::

        registry = ToolRegistry([add_tool, greet_tool])
        tool = registry.lookup("add")
        listing = registry.list_tools()   # tools/list payload
    """

    def __init__(self, tools: Iterable[ToolDefinition] = ()) -> None:
        table: dict[str, ToolDefinition] = {}
        for tool_def in tools:
            if tool_def.name in table:
                raise DuplicateToolError(tool_def.name)
            table[tool_def.name] = tool_def
        self._tools = MappingProxyType(table)

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def lookup(self, name: str) -> ToolDefinition:
        """Return the tool registered as *name*.

        Raises:
            ToolNotFoundError: If no such tool exists.
        """
        tool_def = self._tools.get(name)
        if tool_def is None:
            raise ToolNotFoundError(name)
        return tool_def

    def list_tools(self) -> list[dict[str, Any]]:
        """Return ``{name, description, inputSchema}`` for every tool."""
        return [tool_def.describe() for tool_def in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())
