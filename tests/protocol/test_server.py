"""Tests for the default Server implementation."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from toolwire.protocol.constants import LATEST_PROTOCOL_VERSION
from toolwire.protocol.errors import ToolNotFoundError
from toolwire.protocol.server import Server, ServerProtocol
from toolwire.tools.registry import ToolRegistry


class TestServer:
    def test_satisfies_protocol(self, server) -> None:
        assert isinstance(server, ServerProtocol)

    def test_identity(self, server) -> None:
        assert server.name == "test-server"
        assert server.version == "9.9.9"
        assert server.protocol_version == LATEST_PROTOCOL_VERSION

    def test_capabilities_with_tools(self, server) -> None:
        assert server.capabilities() == {
            "tools": {"listChanged": True},
            "resources": {"listChanged": False},
            "prompts": {"listChanged": False},
        }

    def test_capabilities_without_tools(self) -> None:
        server = Server(name="s", version="1", tools=ToolRegistry())
        assert server.capabilities()["tools"] == {"listChanged": False}

    def test_static_listings(self, server) -> None:
        assert server.list_resources() == []
        assert server.list_prompts() == []

    async def test_call_tool(self, server) -> None:
        result = await server.call_tool("add", {"a": 2, "b": 3})
        assert result.results == [5]

    async def test_call_unknown_tool(self, server) -> None:
        with pytest.raises(ToolNotFoundError):
            await server.call_tool("nope", {})

    async def test_initialize_sync_callback(self) -> None:
        callback = MagicMock()
        server = Server(name="s", version="1", initialize=callback)
        await server.initialize({"clientInfo": {}})
        callback.assert_called_once_with({"clientInfo": {}})

    async def test_initialize_async_callback(self) -> None:
        callback = AsyncMock()
        server = Server(name="s", version="1", initialize=callback)
        await server.initialize({})
        callback.assert_awaited_once_with({})

    async def test_initialize_without_callback(self) -> None:
        await Server(name="s", version="1").initialize({})

    async def test_initialize_failure_propagates(self) -> None:
        async def failing(params):
            await asyncio.sleep(0)
            raise RuntimeError("db down")

        server = Server(name="s", version="1", initialize=failing)
        with pytest.raises(RuntimeError, match="db down"):
            await server.initialize({})

    def test_hooks(self) -> None:
        on_receive, on_send, enqueue = MagicMock(), MagicMock(), MagicMock()
        server = Server(
            name="s",
            version="1",
            on_receive=on_receive,
            on_send=on_send,
            enqueue_notification=enqueue,
        )
        server.on_receive({"m": 1})
        server.on_send("sent")
        server.enqueue_notification("n")
        on_receive.assert_called_once_with({"m": 1})
        on_send.assert_called_once_with("sent")
        enqueue.assert_called_once_with("n")

    def test_hooks_optional(self) -> None:
        server = Server(name="s", version="1")
        server.on_receive({})
        server.on_send("x")
        server.enqueue_notification("y")
