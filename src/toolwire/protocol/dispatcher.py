"""Dispatcher — routes JSON-RPC messages to server operations.

Each message is handled on its own; the only state kept across messages is
the one-shot ``initialize`` handshake.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from toolwire.protocol import constants
from toolwire.protocol.envelope import (
    JsonRpcNotification,
    JsonRpcRequest,
    JsonRpcResponse,
    MalformedMessage,
    MessageKind,
    classify,
    error_from_exception,
    notification,
    response_id,
    result_response,
)
from toolwire.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ToolNotFoundError,
)
from toolwire.utils.telemetry import ATTR_RPC_ERROR_CODE, ATTR_RPC_ID, ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from toolwire.protocol.server import ServerProtocol
    from toolwire.tools.models import InvocationResult

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

Send = Callable[[JsonRpcResponse | JsonRpcNotification], Awaitable[Any]]


def stringify(value: Any) -> str:
    """Render one tool result or error as the text of a content item."""
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value, default=str)


def format_tool_result(outcome: InvocationResult) -> dict[str, Any]:
    """Translate an :class:`InvocationResult` into a ``tools/call`` result."""
    values = outcome.results if outcome.success else outcome.errors
    return {
        "content": [{"type": "text", "text": stringify(v)} for v in values or []],
        "isError": not outcome.success,
    }


class Dispatcher:
    """Routes requests by ``method`` to a :class:`ServerProtocol`.

    Usage::

        dispatcher = Dispatcher(server)
        response = await dispatcher.handle_message(message)
        await dispatcher.process(message, send)   # handle + send + follow-ups
    """

    def __init__(self, server: ServerProtocol) -> None:
        self._server = server
        self._initialized = False
        self._queued: JsonRpcNotification | None = None
        self._init_tasks: set[asyncio.Task[None]] = set()

    @property
    def server(self) -> ServerProtocol:
        return self._server

    async def process(self, message: dict[str, Any] | MalformedMessage, send: Send) -> None:
        """Handle *message*, send its response, then run follow-up work.

        The ``initialize`` callback is started only after the handshake
        response has been sent.
        """
        response = await self.handle_message(message)
        if response is None:
            return
        await send(response)
        if (
            isinstance(message, dict)
            and message.get("method") == constants.METHOD_INITIALIZE
            and not response.is_error
        ):
            self._start_initialization(message.get("params") or {}, send)

    async def handle_message(
        self, message: dict[str, Any] | MalformedMessage
    ) -> JsonRpcResponse | None:
        """Classify *message* and return its response (``None`` for notifications)."""
        if isinstance(message, MalformedMessage):
            logger.debug("Malformed message: %s", message.error.message)
            return JsonRpcResponse(id=None, error=message.error)

        kind = classify(message)
        try:
            if kind is MessageKind.REQUEST:
                return await self.handle_request(message)
            if kind is MessageKind.NOTIFICATION:
                self.handle_notification(message)
                return None
            logger.warning("Unknown message type: %s", message)
            return None
        except Exception as exc:
            logger.error("Critical error handling message: %s", exc)
            if kind is MessageKind.REQUEST:
                return error_from_exception(response_id(message.get("id")), InternalError(str(exc)))
            return None

    async def handle_request(self, message: dict[str, Any]) -> JsonRpcResponse:
        """Route a request by method; protocol errors become error responses."""
        request_id = response_id(message.get("id"))
        with _tracer.start_as_current_span("rpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, str(message.get("method")))
            span.set_attribute(ATTR_RPC_ID, str(request_id))
            try:
                request = self._parse_request(message)
                result = await self._route(request)
                return result_response(request.id, result)
            except ProtocolError as exc:
                logger.debug("Request %s failed: %s", request_id, exc)
                span.set_attribute(ATTR_RPC_ERROR_CODE, exc.code)
                return error_from_exception(request_id, exc)
            except Exception as exc:
                logger.error("Error handling request: %s", exc)
                span.set_attribute(ATTR_RPC_ERROR_CODE, constants.INTERNAL_ERROR)
                return error_from_exception(request_id, InternalError(str(exc)))

    def handle_notification(self, message: dict[str, Any]) -> None:
        """Notifications are never answered; they are only logged."""
        logger.debug("Received notification: %s", message.get("method"))

    # -- routing -----------------------------------------------------------

    @staticmethod
    def _parse_request(message: dict[str, Any]) -> JsonRpcRequest:
        data = dict(message)
        if data.get("params") is None:
            data.pop("params", None)
        try:
            return JsonRpcRequest.model_validate(data)
        except ValidationError as exc:
            raise InvalidRequestError(f"Invalid request: {exc.error_count()} validation error(s)") from exc

    async def _route(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = request.method
        server = self._server

        if method == constants.METHOD_PING:
            logger.debug("Handling ping request with id: %s", request.id)
            return {}
        if method == constants.METHOD_INITIALIZE:
            return self._initialize_result()
        if method == constants.METHOD_TOOLS_LIST:
            return {"tools": server.list_tools()}
        if method == constants.METHOD_TOOLS_CALL:
            return await self._call_tool(request)
        if method == constants.METHOD_PROMPTS_LIST:
            return {"prompts": server.list_prompts()}
        if method == constants.METHOD_RESOURCES_LIST:
            return {"resources": server.list_resources()}

        logger.debug("Unknown method: %s", method)
        raise MethodNotFoundError(method)

    def _initialize_result(self) -> dict[str, Any]:
        server = self._server
        if self._queued is None and not self._initialized:
            self._queued = notification(constants.NOTIFICATION_INITIALIZED)
            server.enqueue_notification(self._queued)
        return {
            "protocolVersion": server.protocol_version,
            "capabilities": server.capabilities(),
            "serverInfo": {"name": server.name, "version": server.version},
        }

    async def _call_tool(self, request: JsonRpcRequest) -> dict[str, Any]:
        name = request.params.get("name")
        arguments = request.params.get("arguments")
        logger.debug("Handling tools/call request (id %s) for %s", request.id, name)

        if not isinstance(name, str):
            raise ToolNotFoundError(str(name))
        if arguments is not None and not isinstance(arguments, dict):
            raise InvalidParamsError("tools/call 'arguments' must be an object")

        outcome = await self._server.call_tool(name, arguments)
        if not outcome.success:
            logger.debug("Tool error in %s: %s", name, outcome.errors)
        return format_tool_result(outcome)

    # -- initialize handshake ----------------------------------------------

    def _start_initialization(self, params: dict[str, Any], send: Send) -> None:
        if self._initialized:
            logger.warning("Ignoring repeated initialize; server already initialized")
            return
        self._initialized = True
        queued = self._queued or notification(constants.NOTIFICATION_INITIALIZED)
        self._queued = None
        task = asyncio.create_task(self._complete_initialization(params, queued, send))
        self._init_tasks.add(task)
        task.add_done_callback(self._init_tasks.discard)

    async def _complete_initialization(
        self,
        params: dict[str, Any],
        queued: JsonRpcNotification,
        send: Send,
    ) -> None:
        try:
            await self._server.initialize(params)
        except Exception as exc:
            logger.error("Server initialize failed: %s", exc)
            return
        await send(queued)

    async def wait_initialized(self) -> None:
        """Wait for any running initialization task to finish."""
        if self._init_tasks:
            await asyncio.gather(*self._init_tasks, return_exceptions=True)
