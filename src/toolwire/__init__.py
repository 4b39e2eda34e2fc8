"""toolwire — typed tools served over line-delimited JSON-RPC (MCP stdio)."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from toolwire.protocol.loop import ServerLoop as ServerLoop
    from toolwire.protocol.server import Server as Server
    from toolwire.tools.builder import tool as tool
    from toolwire.tools.models import Parameter as Parameter
    from toolwire.tools.models import ToolDefinition as ToolDefinition
    from toolwire.tools.registry import ToolRegistry as ToolRegistry

_EXPORTS = {
    "Parameter": "toolwire.tools.models",
    "ToolDefinition": "toolwire.tools.models",
    "ToolRegistry": "toolwire.tools.registry",
    "tool": "toolwire.tools.builder",
    "Server": "toolwire.protocol.server",
    "ServerLoop": "toolwire.protocol.loop",
}


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'toolwire' has no attribute {name!r}")
