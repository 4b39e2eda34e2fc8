"""Small demo tool set.

Serve it with ``toolwire serve toolwire.demo:tools``.
"""

from __future__ import annotations

from typing import Any

from toolwire.tools.builder import spread, tool
from toolwire.tools.models import Parameter, ParamType
from toolwire.tools.registry import ToolRegistry


@tool(
    parameters=[
        Parameter(name="a", type=ParamType.NUMBER, doc="First operand"),
        Parameter(name="b", type=ParamType.NUMBER, doc="Second operand"),
    ]
)
def add(args: dict[str, Any]) -> list[Any]:
    """Add two numbers."""
    return [args["a"] + args["b"]]


@tool(
    parameters=[
        Parameter(name="name", doc="Who to greet"),
        Parameter(name="greeting", doc="Salutation", default="Hello"),
    ]
)
@spread
def greet(name: str, greeting: str) -> list[str]:
    """Greet someone by name."""
    return [f"{greeting}, {name}!"]


@tool(parameters=[Parameter(name="message", type=ParamType.TEXT, doc="Error message to raise")])
def fail(args: dict[str, Any]) -> list[Any]:
    """Always raise; useful for checking error reporting."""
    raise RuntimeError(args["message"])


tools = ToolRegistry([add, greet, fail])
