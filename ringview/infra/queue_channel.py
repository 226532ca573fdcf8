import asyncio
from typing import Any, Mapping, Self

from ringview.core.models.event import Event, RingChange, Sync, Clean, parse_event


class QueueEventChannel:
    """
    In-memory EventChannel backed by an asyncio.Queue.

    Producers publish either ready-made events or raw wire envelopes;
    envelopes are parsed when read, so a malformed one raises
    EventFormatError from the reader side, as a network channel would.
    ``None`` in the queue marks the end of the channel.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Event | Mapping[str, Any] | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event: Event | Mapping[str, Any]) -> None:
        if self._closed:
            raise RuntimeError("Cannot publish on a closed channel")
        self._queue.put_nowait(event)

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(None)

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Event:
        item = await self._queue.get()
        if item is None:
            # keep the sentinel for any further reader
            self._queue.put_nowait(None)
            raise StopAsyncIteration

        if isinstance(item, (RingChange, Sync, Clean)):
            return item
        return parse_event(item)
