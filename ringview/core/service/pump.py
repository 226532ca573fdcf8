import logging

from ringview.core.errors import ChannelError, EventFormatError
from ringview.core.ports.channel import EventChannel
from ringview.core.service.state import RingState


class EventPump:
    """
    Feeds events from an EventChannel into a RingState.

    Events are applied strictly in arrival order, one at a time, each to
    completion before the next one is read. The only suspension point is
    waiting on the channel.

    - A malformed envelope is logged and skipped.
    - A ChannelError ends the run. The last snapshot stays published and
      valid for rendering.
    - A closed channel ends the run the same way.
    """

    def __init__(self, channel: EventChannel, state: RingState) -> None:
        self._channel = channel
        self._state = state
        self._processed = 0
        self._logger = logging.getLogger("core.service.pump")

    @property
    def processed(self) -> int:
        """Number of events applied so far."""
        return self._processed

    async def run(self) -> None:
        self._logger.info("Event channel opened")
        iterator = aiter(self._channel)

        try:
            while True:
                try:
                    event = await anext(iterator)
                except StopAsyncIteration:
                    break
                except EventFormatError as ex:
                    self._logger.warning(f"Dropping malformed event: {ex}")
                    continue

                self._state.apply(event)
                self._processed += 1
        except ChannelError as ex:
            self._logger.error(f"Event channel failed: {ex}")
        finally:
            self._logger.info(
                f"Event channel closed after {self._processed} events, "
                f"snapshot v{self._state.snapshot.version} kept"
            )
