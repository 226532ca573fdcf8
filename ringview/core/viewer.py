import asyncio
import logging
from typing import Callable

from ringview.core.errors import ChannelError
from ringview.core.models.snapshot import RingSnapshot
from ringview.core.ports.render import Renderer
from ringview.core.ports.serializer import Serializer
from ringview.core.service.pump import EventPump
from ringview.core.service.state import RingState
from ringview.infra.stream_channel import StreamEventChannel


class RingViewer:
    """
    Wires a topology source, a RingState and a Renderer together.

    The viewer connects to the source, pumps its events into the state and
    writes a fresh rendering each time a new snapshot is published. It runs
    until the source closes the channel or the stop event is set.
    """
    def __init__(
        self,
        host: str,
        port: int,
        state: RingState,
        renderer: Renderer,
        serializer: Serializer,
        max_frame_size: int = 1 * 1024 * 1024,
        output: Callable[[str], None] = print,
    ) -> None:
        self._host = host
        self._port = port
        self._state = state
        self._renderer = renderer
        self._serializer = serializer
        self._max_frame_size = max_frame_size
        self._output = output
        self._logger = logging.getLogger("core.viewer")

        self._state.subscribe(self._on_snapshot)

    @property
    def state(self) -> RingState:
        return self._state

    async def watch(self, stop_event: asyncio.Event) -> None:
        try:
            channel = await StreamEventChannel.connect(
                self._host,
                self._port,
                self._serializer,
                max_frame_size=self._max_frame_size,
            )
        except ChannelError as ex:
            self._logger.error(str(ex))
            return

        self._logger.info(f"Watching ring topology at {self._host}:{self._port}")
        self._output(self._renderer.render(self._state.snapshot))

        pump_task = asyncio.create_task(EventPump(channel, self._state).run())
        stop_task = asyncio.create_task(stop_event.wait())

        try:
            await asyncio.wait(
                {pump_task, stop_task},
                return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (pump_task, stop_task):
                task.cancel()
            await asyncio.gather(pump_task, stop_task, return_exceptions=True)
            await channel.close()

        if not pump_task.cancelled() and (ex := pump_task.exception()):
            raise ex

    def _on_snapshot(self, snapshot: RingSnapshot) -> None:
        self._output(self._renderer.render(snapshot))

