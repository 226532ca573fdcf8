from typing import Protocol

from ringview.core.models.snapshot import RingSnapshot


class Renderer(Protocol):
    def render(self, snapshot: RingSnapshot) -> str:
        ...
