import bisect
from typing import Generator, Iterator

from ringview.core.models.node import NodeDescriptor


class Ring:
    """
    Ring-ordered view over the members of a snapshot.

    Snapshots keep members in arrival order, which is what the topology
    source sent. The Ring sorts them by identifier so callers can walk the
    ring or find which member follows a given position.

    The ring is immutable; it is rebuilt from each new snapshot.
    """
    def __init__(self, nodes: list[NodeDescriptor] | None = None) -> None:
        self._nodes = sorted(nodes or [], key=lambda n: n.identifier)

    def find_successor(self, identifier: int) -> NodeDescriptor | None:
        """
        Return the first member whose identifier is strictly greater than
        the given one, wrapping around to the lowest member at the end of
        the ring. Returns None on an empty ring.

        Complexity: O(log n)
        """
        if not self._nodes:
            return None

        idx = bisect.bisect_right(self._nodes, identifier, key=lambda n: n.identifier)
        if idx == len(self._nodes):
            idx = 0  # wrap-around
        return self._nodes[idx]

    def find_predecessor(self, identifier: int) -> NodeDescriptor | None:
        """
        Return the last member whose identifier is strictly lower than the
        given one, wrapping around to the highest member.
        """
        if not self._nodes:
            return None

        idx = bisect.bisect_left(self._nodes, identifier, key=lambda n: n.identifier)
        return self._nodes[idx - 1]

    def find_match(self, identifier: int) -> NodeDescriptor | None:
        """Return the member sitting exactly at identifier, if any."""
        idx = bisect.bisect_left(self._nodes, identifier, key=lambda n: n.identifier)
        if idx < len(self._nodes) and self._nodes[idx].identifier == identifier:
            return self._nodes[idx]
        return None

    def iter_from(self, node: NodeDescriptor) -> Generator[NodeDescriptor, None, None]:
        """Yield members in ring order starting from node, wrapping around."""
        start = self._nodes.index(node)
        for i in range(len(self._nodes)):
            yield self._nodes[(start + i) % len(self._nodes)]

    def __getitem__(self, i: int) -> NodeDescriptor:
        return self._nodes[i]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[NodeDescriptor]:
        return iter(self._nodes)
