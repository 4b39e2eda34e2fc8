"""Helpers for declaring tools in code.

Usage::

    @tool(parameters=[
        Parameter(name="a", type="number"),
        Parameter(name="b", type="number"),
    ])
    def add(args):
        "Add two numbers."
        return [args["a"] + args["b"]]

    @tool(parameters=[Parameter(name="name"), Parameter(name="greeting", default="Hello")])
    @spread
    def greet(name, greeting):
        return [f"{greeting}, {name}!"]
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Iterable
from typing import Any

from toolwire.tools.models import Handler, Parameter, ToolDefinition


def spread(fn: Callable[..., Any]) -> Handler:
    """Adapt a keyword-argument function to the argument-map handler contract."""
    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def _async_handler(arguments: dict[str, Any]) -> Any:
            return await fn(**arguments)

        return _async_handler

    @functools.wraps(fn)
    def _handler(arguments: dict[str, Any]) -> Any:
        return fn(**arguments)

    return _handler


def tool(
    name: str | None = None,
    *,
    doc: str | None = None,
    parameters: Iterable[Parameter | dict[str, Any]] = (),
) -> Callable[[Handler], ToolDefinition]:
    """Decorator building a :class:`ToolDefinition` around a handler.

    The tool name defaults to the function name and the description to its
    docstring.
    """
    params = tuple(p if isinstance(p, Parameter) else Parameter.model_validate(p) for p in parameters)

    def _decorate(handler: Handler) -> ToolDefinition:
        return ToolDefinition(
            name=name or handler.__name__,
            doc=doc if doc is not None else inspect.getdoc(handler) or "",
            parameters=params,
            handler=handler,
        )

    return _decorate
