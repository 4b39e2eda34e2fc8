"""JSON-RPC 2.0 envelopes — constructors, parsing, and classification.

Outgoing messages are pydantic models serialised with :meth:`to_wire`.
Incoming lines are decoded with :func:`parse_message` and sorted into
requests, notifications, or unrecognised shapes by :func:`classify`.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr

from toolwire.protocol.constants import JSONRPC_VERSION
from toolwire.protocol.errors import InvalidRequestError, ParseError, ProtocolError

RequestId = StrictInt | StrictFloat | StrictStr

# ---------------------------------------------------------------------------
# Envelope models
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId
    method: StrictStr
    params: dict[str, Any] = {}


class JsonRpcNotification(BaseModel):
    """A JSON-RPC 2.0 notification: a method call without an ``id``."""

    jsonrpc: str = JSONRPC_VERSION
    method: StrictStr
    params: dict[str, Any] | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "method": self.method}
        if self.params is not None:
            data["params"] = self.params
        return data


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response: exactly one of ``result`` / ``error``."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump(exclude_none=True)
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


def response_id(raw: Any) -> int | float | str | None:
    """The ``id`` to echo back: the request's own if it is a valid scalar."""
    if isinstance(raw, (int, float, str)) and not isinstance(raw, bool):
        return raw
    return None


def result_response(request_id: Any, result: dict[str, Any]) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, result=result)


def error_response(
    request_id: Any,
    code: int,
    message: str,
    data: Any = None,
) -> JsonRpcResponse:
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=code, message=message, data=data),
    )


def error_from_exception(request_id: Any, exc: ProtocolError) -> JsonRpcResponse:
    """Build the error response for a :class:`ProtocolError`."""
    return error_response(request_id, exc.code, exc.message, exc.to_data())


def notification(method: str, params: dict[str, Any] | None = None) -> JsonRpcNotification:
    return JsonRpcNotification(method=method, params=params)


# ---------------------------------------------------------------------------
# Incoming messages
# ---------------------------------------------------------------------------


class MessageKind(str, Enum):
    """Shape of an incoming message."""

    REQUEST = "request"
    NOTIFICATION = "notification"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


class MalformedMessage(BaseModel):
    """Stand-in for a line that could not be read or decoded."""

    error: JsonRpcError


def parse_message(line: str) -> dict[str, Any] | MalformedMessage:
    """Decode one input line.

    Undecodable lines (parse error) and JSON values that are not objects
    (invalid request) come back as a :class:`MalformedMessage` rather than
    raising, so the reader never stops on bad input.
    """
    try:
        value = json.loads(line)
    except ValueError as exc:
        return malformed(ParseError(str(exc)))
    if not isinstance(value, dict):
        return malformed(
            InvalidRequestError(
                "Invalid request: expected a JSON object",
                data={"detail": f"got {type(value).__name__}"},
            )
        )
    return value


def malformed(exc: ProtocolError) -> MalformedMessage:
    return MalformedMessage(error=JsonRpcError(code=exc.code, message=exc.message, data=exc.to_data()))


def classify(message: dict[str, Any] | MalformedMessage) -> MessageKind:
    """Requests carry ``method`` and a non-null ``id``; notifications omit ``id``."""
    if isinstance(message, MalformedMessage):
        return MessageKind.MALFORMED
    if "method" not in message:
        return MessageKind.UNKNOWN
    if message.get("id") is not None:
        return MessageKind.REQUEST
    return MessageKind.NOTIFICATION


def encode(message: JsonRpcResponse | JsonRpcNotification) -> str:
    """Serialise an outgoing message as a single JSON line (no newline)."""
    return json.dumps(message.to_wire(), default=str)
