from typing import Self

from ringview.core.models.event import Event


class ScriptedChannel:
    """
    EventChannel replaying a fixed script.

    Each step is either an Event, which is yielded, or an exception
    instance, which is raised from ``__anext__``. The channel ends when the
    script is exhausted.
    """

    def __init__(self, steps: list[Event | BaseException]) -> None:
        self._steps = list(steps)
        self.closed = False

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Event:
        if not self._steps:
            raise StopAsyncIteration

        step = self._steps.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step

    async def close(self) -> None:
        self.closed = True
