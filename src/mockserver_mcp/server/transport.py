"""Server transports — where JSON-RPC lines come from and go to.

Each transport satisfies the :class:`ServerTransport` protocol: ``receive``
yields one raw message (``None`` at end of input) and ``send`` writes one
JSON object.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import IO, Any, Protocol, runtime_checkable


@runtime_checkable
class ServerTransport(Protocol):
    """Abstract transport for serving MCP JSON-RPC."""

    async def receive(self) -> str | None: ...
    async def send(self, data: dict[str, Any]) -> None: ...


class StdioServerTransport:
    """Reads newline-delimited JSON from stdin and writes it to stdout.

    Blocking reads run in a worker thread so the event loop stays free while
    a tool call is in flight.
    """

    def __init__(self, stdin: IO[str] | None = None, stdout: IO[str] | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._write_lock = asyncio.Lock()

    async def receive(self) -> str | None:
        """Return the next non-blank line, or ``None`` at EOF."""
        while True:
            line = await asyncio.to_thread(self._stdin.readline)
            if not line:
                return None
            if line.strip():
                return line

    async def send(self, data: dict[str, Any]) -> None:
        """Write *data* as a single ASCII JSON line and flush."""
        line = json.dumps(data) + "\n"
        async with self._write_lock:
            self._stdout.write(line)
            self._stdout.flush()
