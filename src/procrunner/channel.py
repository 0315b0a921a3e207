"""Line channel: an asyncio queue of output lines with a completion signal."""

import asyncio
from collections.abc import AsyncIterator

_COMPLETED = object()


class ChannelClosedError(Exception):
    """Raised when publishing to, or receiving from, a completed channel."""


class LineChannel:
    """Ordered multi-producer, multi-consumer buffer of text lines.

    The channel is unbounded unless ``maxsize`` is given, in which case
    :meth:`publish` waits for free capacity. Once :meth:`complete` is called
    no more lines are accepted; consumers drain what is buffered and then
    observe completion.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._completed = False
        self._pending_marker: asyncio.Future | None = None

    @property
    def is_completed(self) -> bool:
        return self._completed

    async def publish(self, line: str) -> None:
        if self._completed:
            raise ChannelClosedError("cannot publish to a completed channel")
        await self._queue.put(line)

    def complete(self) -> bool:
        """Mark the channel finished. Returns False if it already was."""
        if self._completed:
            return False
        self._completed = True
        # The marker may wait behind a full bounded queue; consumers still get it.
        try:
            self._queue.put_nowait(_COMPLETED)
        except asyncio.QueueFull:
            self._pending_marker = asyncio.ensure_future(self._queue.put(_COMPLETED))
        return True

    async def receive(self) -> str:
        item = await self._queue.get()
        if item is _COMPLETED:
            # Hand the marker on so every waiting consumer wakes up.
            self._queue.put_nowait(_COMPLETED)
            raise ChannelClosedError("channel is completed")
        return item

    async def __aiter__(self) -> AsyncIterator[str]:
        while True:
            try:
                yield await self.receive()
            except ChannelClosedError:
                return
