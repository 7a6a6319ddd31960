"""Open MCP stream sessions.

Each ``GET /mcp/sse`` connection owns one bounded channel. Requests posted to
``/mcp/message`` are dispatched and their replies are pushed onto the channel of
the session named by ``sessionId``; the stream drains it.
"""

import asyncio
import uuid

from typing import Any

from slides_server.common.log import log

DEFAULT_QUEUE_MAXSIZE = 100


class ChannelClosedError(Exception):
    """The stream consumer has gone away"""


_CLOSED = object()


class SessionChannel:
    """Bounded FIFO of outbound JSON-RPC messages for one stream"""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_MAXSIZE) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._closed_event = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, message: dict[str, Any]) -> None:
        """
        Enqueue a message, waiting while the channel is full

        A sender still waiting for room when the channel closes is released
        with :class:`ChannelClosedError`; its message is dropped.
        """
        if self._closed:
            raise ChannelClosedError('Channel closed')
        if not self._queue.full():
            self._queue.put_nowait(message)
            return

        put = asyncio.ensure_future(self._queue.put(message))
        closed = asyncio.ensure_future(self._closed_event.wait())
        try:
            done, _ = await asyncio.wait({put, closed}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            closed.cancel()
            if not put.done():
                put.cancel()
        if put not in done:
            raise ChannelClosedError('Channel closed')
        put.result()

    async def receive(self, timeout: float | None = None) -> dict[str, Any] | None:
        """
        Wait for the next message

        :param timeout: seconds to wait, None waits forever
        :return: the message, or None when the timeout elapsed first
        """
        if self._closed and self._queue.empty():
            raise ChannelClosedError('Channel closed')
        try:
            message = await asyncio.wait_for(self._queue.get(), timeout)
        except asyncio.TimeoutError:
            return None
        if message is _CLOSED:
            raise ChannelClosedError('Channel closed')
        return message

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._closed_event.set()
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # The consumer sees ``closed`` once it drains the backlog
            pass


class SessionRegistry:
    """Maps session tokens to their channels"""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_MAXSIZE) -> None:
        self.maxsize = maxsize
        self._sessions: dict[str, SessionChannel] = {}
        self._lock = asyncio.Lock()

    @property
    def count(self) -> int:
        return len(self._sessions)

    async def open(self) -> tuple[str, SessionChannel]:
        channel = SessionChannel(self.maxsize)
        async with self._lock:
            token = uuid.uuid4().hex
            while token in self._sessions:
                token = uuid.uuid4().hex
            self._sessions[token] = channel
        log.debug(f'Opened MCP session {token}')
        return token, channel

    async def get(self, token: str) -> SessionChannel | None:
        async with self._lock:
            return self._sessions.get(token)

    async def close(self, token: str) -> None:
        async with self._lock:
            channel = self._sessions.pop(token, None)
        if channel is not None:
            channel.close()
            log.debug(f'Closed MCP session {token}')

    async def close_all(self) -> None:
        async with self._lock:
            channels = list(self._sessions.values())
            self._sessions.clear()
        for channel in channels:
            channel.close()
