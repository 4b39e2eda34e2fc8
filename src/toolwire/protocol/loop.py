"""ServerLoop — one sequential reader, one task per message, one locked writer.

The loop reads a line, parses it, schedules its processing as an independent
asyncio task, and goes straight back to reading. Responses therefore complete
in any order; each is correlated with its request only by ``id``. All writes
share a single lock so concurrently finishing responses never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from toolwire.protocol.envelope import (
    JsonRpcNotification,
    JsonRpcResponse,
    MalformedMessage,
    MessageKind,
    classify,
    encode,
    error_from_exception,
    malformed,
    parse_message,
    response_id,
)
from toolwire.protocol.errors import InternalError, ParseError
from toolwire.protocol.transport import ServerTransport, StdioTransport

if TYPE_CHECKING:
    from toolwire.protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

DEFAULT_MAX_READ_ERRORS = 16


class ServerLoop:
    """Drives a :class:`Dispatcher` over a :class:`ServerTransport`.

    Usage::

        loop = ServerLoop(Dispatcher(server))
        await loop.serve()      # returns at end of input
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        transport: ServerTransport | None = None,
        *,
        max_read_errors: int = DEFAULT_MAX_READ_ERRORS,
    ) -> None:
        self._dispatcher = dispatcher
        self._transport = transport or StdioTransport()
        self._max_read_errors = max_read_errors
        self._write_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of messages still being processed."""
        return len(self._tasks)

    async def serve(self) -> None:
        """Read and dispatch messages until the input stream ends."""
        logger.debug("Starting %s server...", self._dispatcher.server.name)
        read_errors = 0
        while True:
            logger.debug("Waiting for request...")
            try:
                line = await self._transport.read_line()
            except Exception as exc:
                read_errors += 1
                logger.debug("Error reading message: %s", exc)
                if read_errors >= self._max_read_errors:
                    logger.error("Stopping after %d consecutive read errors", read_errors)
                    break
                self._receive(malformed(ParseError(str(exc))))
                continue

            read_errors = 0
            if line is None:
                logger.debug("Input closed, client probably disconnected")
                break
            if not line.strip():
                continue
            logger.debug("Received message: %s", line)
            self._receive(parse_message(line))

        await self.drain()
        logger.debug("Exiting.")

    def run(self) -> None:
        """Blocking entry point: run :meth:`serve` in a fresh event loop."""
        asyncio.run(self.serve())

    async def drain(self) -> None:
        """Wait for every scheduled message and the initialize follow-up."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        await self._dispatcher.wait_initialized()

    async def send(self, message: JsonRpcResponse | JsonRpcNotification) -> bool:
        """Serialise and write one message under the output lock.

        Returns ``False`` (after logging) if the message could not be written.
        """
        try:
            line = encode(message)
            self._call_hook(self._dispatcher.server.on_send, message)
            async with self._write_lock:
                await self._transport.write_line(line)
        except Exception as exc:
            logger.error("Error writing message: %s", exc)
            return False
        logger.debug("Sent message: %s", line)
        return True

    # -- internals ---------------------------------------------------------

    def _receive(self, message: dict[str, Any] | MalformedMessage) -> None:
        self._call_hook(self._dispatcher.server.on_receive, message)
        task = asyncio.create_task(self._handle(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _handle(self, message: dict[str, Any] | MalformedMessage) -> None:
        try:
            await self._dispatcher.process(message, self.send)
        except Exception as exc:
            logger.error("Critical error handling message: %s", exc)
            if isinstance(message, dict) and classify(message) is MessageKind.REQUEST:
                await self.send(error_from_exception(response_id(message.get("id")), InternalError(str(exc))))

    @staticmethod
    def _call_hook(hook: Any, message: Any) -> None:
        try:
            hook(message)
        except Exception as exc:
            logger.warning("Message hook %r failed: %s", hook, exc)
