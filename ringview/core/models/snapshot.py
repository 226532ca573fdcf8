from dataclasses import dataclass, field
from typing import Any, Self

from ringview.core.models.node import DecodeFailure, NodeDescriptor
from ringview.core.space.ring import Ring


@dataclass(frozen=True)
class RingSnapshot:
    """
    Everything known about the ring at one point in time.

    A snapshot is never patched. Each RingChange event produces a brand-new
    snapshot which replaces the previous one as a whole. The empty snapshot
    (version 0, no members, no self) is valid and means "nothing known
    yet". A later snapshot whose routes all failed to decode is not empty:
    it still carries its failures.
    """
    members: tuple[NodeDescriptor, ...] = ()
    """
    Members in the order the topology source listed them, not ring order.
    Use ring() for identifier order.
    """

    self_node: NodeDescriptor | None = None
    """
    The member the topology source runs on, or None before the first
    RingChange or when its description failed to decode.
    """

    failures: tuple[DecodeFailure, ...] = ()
    """
    Raw nodes that were skipped while building this snapshot.
    """

    version: int = 0
    """
    Number of RingChange events applied so far; 0 for the empty snapshot.
    """

    _ring: Ring | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @property
    def is_empty(self) -> bool:
        """True until the first RingChange has been applied."""
        return self.version == 0

    def ring(self) -> Ring:
        if self._ring is None:
            object.__setattr__(self, "_ring", Ring(list(self.members)))
        return self._ring

    def find_successor(self, identifier: int) -> NodeDescriptor | None:
        return self.ring().find_successor(identifier)

    def describe(self) -> str:
        """One "<hex>@<address>" line per member, in ring order."""
        return "\n".join(node.label for node in self.ring())

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "members": [node.to_dict() for node in self.members],
            "self": self.self_node.to_dict() if self.self_node else None,
            "failures": [failure.to_dict() for failure in self.failures],
        }
