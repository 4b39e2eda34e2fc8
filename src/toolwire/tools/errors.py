"""Tool-level error types."""


class ToolError(Exception):
    """Base error for tool definition and tool execution failures."""


class ToolDefinitionError(ToolError, ValueError):
    """A tool or parameter was declared inconsistently."""


class DuplicateToolError(ToolDefinitionError):
    """Two tools were registered under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate tool name: {name}")


class HandlerError(ToolError):
    """A tool handler raised while producing its results."""

    cause = "handler-exception"

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        self.message = message
        super().__init__(message)
