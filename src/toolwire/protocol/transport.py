"""Server-side transports for line-delimited JSON-RPC.

Each transport satisfies the :class:`ServerTransport` protocol, providing
``read_line`` and ``write_line``. Locking is the caller's job: the server
loop serialises every write.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class ServerTransport(Protocol):
    """A source of input lines and a sink for output lines."""

    async def read_line(self) -> str | None: ...
    async def write_line(self, line: str) -> None: ...


class StdioTransport:
    """Reads requests from stdin and writes responses to stdout.

    ``readline`` blocks, so it runs in the default executor to keep the
    event loop free for in-flight tool calls. Any text streams may be passed
    in place of the process's own.
    """

    def __init__(self, input: TextIO | None = None, output: TextIO | None = None) -> None:
        self._input = input if input is not None else sys.stdin
        self._output = output if output is not None else sys.stdout

    async def read_line(self) -> str | None:
        """Return the next line without its newline, or ``None`` at end of stream."""
        loop = asyncio.get_running_loop()
        line = await loop.run_in_executor(None, self._input.readline)
        if not line:
            return None
        return line.rstrip("\r\n")

    async def write_line(self, line: str) -> None:
        """Write one line and flush immediately."""
        self._output.write(line + "\n")
        self._output.flush()
