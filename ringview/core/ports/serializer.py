from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding event frames received
    from the topology source.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - safe against malformed input
    """

    def serialize(self, message: Any) -> bytes:
        """Encode a Python object into a frame payload."""

    def deserialize(self, data: bytes) -> Any:
        """Decode a frame payload into a Python object."""
