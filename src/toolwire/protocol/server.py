"""Server capability set and its default implementation.

:class:`ServerProtocol` is everything the dispatcher needs from a deployment:
identity, capabilities, the user initialization callback, tool listing and
calling, the (static) resource and prompt listings, and observability hooks.
:class:`Server` implements it from a :class:`ToolRegistry` plus callbacks.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from toolwire.protocol.constants import LATEST_PROTOCOL_VERSION
from toolwire.tools.invoker import invoke_tool
from toolwire.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from toolwire.protocol.envelope import JsonRpcNotification, JsonRpcResponse
    from toolwire.tools.models import InvocationResult

logger = logging.getLogger(__name__)

InitializeCallback = Callable[[dict[str, Any]], Any]
MessageHook = Callable[[Any], None]


@runtime_checkable
class ServerProtocol(Protocol):
    """What the dispatcher requires from a server."""

    @property
    def protocol_version(self) -> str: ...
    @property
    def name(self) -> str: ...
    @property
    def version(self) -> str: ...

    def capabilities(self) -> dict[str, Any]: ...
    async def initialize(self, params: dict[str, Any]) -> None: ...

    def list_tools(self) -> list[dict[str, Any]]: ...
    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> InvocationResult: ...
    def list_resources(self) -> list[dict[str, Any]]: ...
    def list_prompts(self) -> list[dict[str, Any]]: ...

    def on_receive(self, message: Any) -> None: ...
    def on_send(self, message: JsonRpcResponse | JsonRpcNotification) -> None: ...
    def enqueue_notification(self, message: JsonRpcNotification) -> None: ...


class Server:
    """Default :class:`ServerProtocol` implementation.

    Usage::

        server = Server(
            name="calc",
            version="1.0.0",
            tools=ToolRegistry([add]),
            initialize=warm_up_cache,
        )

    Satisfies the :class:`ServerProtocol` protocol.
    """

    def __init__(
        self,
        *,
        name: str,
        version: str,
        tools: ToolRegistry | None = None,
        protocol_version: str = LATEST_PROTOCOL_VERSION,
        initialize: InitializeCallback | None = None,
        on_receive: MessageHook | None = None,
        on_send: MessageHook | None = None,
        enqueue_notification: MessageHook | None = None,
    ) -> None:
        self._name = name
        self._version = version
        self._protocol_version = protocol_version
        self._tools = tools or ToolRegistry()
        self._initialize = initialize
        self._on_receive = on_receive
        self._on_send = on_send
        self._enqueue_notification = enqueue_notification

    @property
    def protocol_version(self) -> str:
        return self._protocol_version

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    def capabilities(self) -> dict[str, Any]:
        return {
            "tools": {"listChanged": len(self._tools) > 0},
            "resources": {"listChanged": bool(self.list_resources())},
            "prompts": {"listChanged": bool(self.list_prompts())},
        }

    async def initialize(self, params: dict[str, Any]) -> None:
        """Run the user initialization callback, if any."""
        if self._initialize is None:
            return
        if inspect.iscoroutinefunction(self._initialize):
            await self._initialize(params)
            return
        loop = asyncio.get_running_loop()
        value = await loop.run_in_executor(None, functools.partial(self._initialize, params))
        if inspect.isawaitable(value):
            await value

    def list_tools(self) -> list[dict[str, Any]]:
        return self._tools.list_tools()

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> InvocationResult:
        """Resolve *name* and run the invocation pipeline.

        Raises:
            ToolNotFoundError: If *name* is not registered.
            MissingParametersError: If required arguments are absent.
        """
        tool_def = self._tools.lookup(name)
        return await invoke_tool(tool_def, arguments)

    def list_resources(self) -> list[dict[str, Any]]:
        return []

    def list_prompts(self) -> list[dict[str, Any]]:
        return []

    def on_receive(self, message: Any) -> None:
        if self._on_receive is not None:
            self._on_receive(message)

    def on_send(self, message: JsonRpcResponse | JsonRpcNotification) -> None:
        if self._on_send is not None:
            self._on_send(message)

    def enqueue_notification(self, message: JsonRpcNotification) -> None:
        if self._enqueue_notification is not None:
            self._enqueue_notification(message)
