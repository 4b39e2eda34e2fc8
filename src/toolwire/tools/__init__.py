"""Tool definitions, registry, validation, and invocation."""

from toolwire.tools.builder import spread, tool
from toolwire.tools.errors import DuplicateToolError, HandlerError, ToolDefinitionError, ToolError
from toolwire.tools.invoker import invoke_handler, invoke_tool
from toolwire.tools.models import (
    InvocationResult,
    Parameter,
    ParamType,
    ToolDefinition,
    TypeErrorRecord,
)
from toolwire.tools.registry import ToolRegistry
from toolwire.tools.validation import ValidationOutcome, validate_arguments

__all__ = [
    "DuplicateToolError",
    "HandlerError",
    "InvocationResult",
    "ParamType",
    "Parameter",
    "ToolDefinition",
    "ToolDefinitionError",
    "ToolError",
    "ToolRegistry",
    "TypeErrorRecord",
    "ValidationOutcome",
    "invoke_handler",
    "invoke_tool",
    "spread",
    "tool",
    "validate_arguments",
]
