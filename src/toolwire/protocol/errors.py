"""Protocol-level errors.

Every error here maps to a JSON-RPC error response. Tool-level failures
(type mismatches, handler exceptions) live in :mod:`toolwire.tools.errors`
and never escape as exceptions past the invocation pipeline.
"""

from __future__ import annotations

from typing import Any

from toolwire.protocol.constants import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)


class ProtocolError(Exception):
    """Base error for failures answered with a JSON-RPC error response."""

    code: int = INTERNAL_ERROR
    cause: str = "internal"

    def __init__(self, message: str, *, data: dict[str, Any] | None = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_data(self) -> dict[str, Any]:
        """Diagnostic payload for the ``error.data`` member."""
        return {"cause": self.cause, **(self.data or {})}


class ParseError(ProtocolError):
    """An input line could not be read or decoded as JSON."""

    code = PARSE_ERROR
    cause = "parse"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Parse error", data={"detail": detail} if detail else None)


class InvalidRequestError(ProtocolError):
    """The message is JSON but not a valid JSON-RPC request."""

    code = INVALID_REQUEST
    cause = "invalid-request"


class MethodNotFoundError(ProtocolError):
    """No handler exists for the requested method."""

    code = METHOD_NOT_FOUND
    cause = "method-not-found"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ProtocolError):
    """The request parameters do not fit the called operation."""

    code = INVALID_PARAMS
    cause = "invalid-params"


class ToolNotFoundError(InvalidParamsError):
    """``tools/call`` named a tool that is not registered."""

    cause = "missing-tool"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}", data={"tool": name})


class MissingParametersError(InvalidParamsError):
    """Required tool arguments were not supplied."""

    cause = "missing-parameters"

    def __init__(
        self,
        missing: list[str],
        *,
        provided: list[str],
        required: list[str],
    ) -> None:
        self.missing = missing
        self.provided = provided
        self.required = required
        super().__init__(
            "Missing tool parameters: " + ", ".join(missing),
            data={"provided-args": provided, "required-args": required},
        )


class InternalError(ProtocolError):
    """Unexpected failure while handling a request."""

    code = INTERNAL_ERROR
    cause = "internal"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Internal error: {detail}")
