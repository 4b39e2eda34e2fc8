"""MCP server protocol — JSON-RPC envelopes, dispatcher, and stdio loop.

Only the leaf modules are re-exported here; import the dispatcher, server
and loop from their own modules.
"""

from toolwire.protocol.envelope import (
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    MessageKind,
)
from toolwire.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    MissingParametersError,
    ParseError,
    ProtocolError,
    ToolNotFoundError,
)

__all__ = [
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MessageKind",
    "MethodNotFoundError",
    "MissingParametersError",
    "ParseError",
    "ProtocolError",
    "ToolNotFoundError",
]
