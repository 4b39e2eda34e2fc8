"""Tool invocation pipeline — validate, then run the handler.

Failure modes, in order:

1. Missing required arguments raise :class:`MissingParametersError`. This is
   the only failure that escapes as an exception (a protocol error).
2. Type mismatches return a failed :class:`InvocationResult`.
3. Handler exceptions are caught and returned as a failed result.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from toolwire.protocol.errors import MissingParametersError
from toolwire.tools.errors import HandlerError
from toolwire.tools.models import InvocationResult, ToolDefinition
from toolwire.tools.validation import validate_arguments
from toolwire.utils.telemetry import ATTR_TOOL_NAME, ATTR_TOOL_SUCCESS, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _as_results(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def with_defaults(tool: ToolDefinition, arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Return *arguments* plus declared defaults for absent optional parameters."""
    merged = dict(arguments)
    for param in tool.parameters:
        if param.name not in merged and param.has_default:
            merged[param.name] = param.default
    return merged


async def invoke_handler(tool: ToolDefinition, arguments: dict[str, Any]) -> list[Any]:
    """Run the tool's handler and normalise its output to a list.

    Coroutine handlers are awaited; plain functions run in the default
    executor so concurrent calls do not block the event loop.

    Raises:
        HandlerError: Wrapping whatever the handler raised.
    """
    try:
        if inspect.iscoroutinefunction(tool.handler):
            value = await tool.handler(arguments)
        else:
            loop = asyncio.get_running_loop()
            value = await loop.run_in_executor(None, functools.partial(tool.handler, arguments))
            if inspect.isawaitable(value):
                value = await value
    except Exception as exc:
        logger.error("Tool handler exception in %s: %s", tool.name, exc)
        raise HandlerError(tool.name, str(exc) or type(exc).__name__) from exc
    return _as_results(value)


async def invoke_tool(tool: ToolDefinition, arguments: Mapping[str, Any] | None) -> InvocationResult:
    """Validate *arguments* against *tool* and run it.

    Raises:
        MissingParametersError: If a required argument is absent.
    """
    args = dict(arguments or {})
    with _tracer.start_as_current_span("tool.invoke") as span:
        span.set_attribute(ATTR_TOOL_NAME, tool.name)

        outcome = validate_arguments(tool.parameters, args)
        if outcome.missing:
            raise MissingParametersError(
                outcome.missing,
                provided=list(args),
                required=tool.required_names,
            )
        if outcome.type_errors:
            logger.debug("Type validation failed for %s: %s", tool.name, outcome.type_errors)
            span.set_attribute(ATTR_TOOL_SUCCESS, False)
            return InvocationResult.failed(list(outcome.type_errors))

        try:
            results = await invoke_handler(tool, with_defaults(tool, args))
        except HandlerError as exc:
            span.set_attribute(ATTR_TOOL_SUCCESS, False)
            return InvocationResult.failed([exc.message])

        span.set_attribute(ATTR_TOOL_SUCCESS, True)
        return InvocationResult.ok(results)
