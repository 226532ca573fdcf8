from typing import Protocol, Self

from ringview.core.models.event import Event


class EventChannel(Protocol):
    """
    An ordered source of topology events pushed from outside.

    The channel is its own async iterator. ``__anext__`` yields events in
    arrival order and suspends until the next one is available; it raises
    StopAsyncIteration once the channel is closed. A transport failure
    surfaces as ChannelError. A single malformed envelope surfaces as
    EventFormatError, after which the channel can still be read.

    The channel owns framing and reconnection. Consumers only read.
    """

    def __aiter__(self) -> Self:
        ...

    async def __anext__(self) -> Event:
        ...

    async def close(self) -> None:
        ...
