from dataclasses import dataclass, asdict
from typing import Any, Mapping, Self

from ringview.core.errors import DecodeError
from ringview.core.space.identifier import IdentifierCodec
from ringview.core.space.layout import RingLayout, derive_control_address


@dataclass(frozen=True, slots=True)
class NodeDescriptor:
    """
    A ring member decoded from the topology source and placed on the diagram.

    Descriptors are immutable. Every derived field is a pure function of the
    raw node and the layout, so decoding the same raw node twice always
    yields equal descriptors.
    """
    data_address: str
    """
    Address the member serves application traffic on (host:port).
    """

    control_address: str
    """
    Diagnostic/status address of the member, always data port + 1.
    """

    identifier: int
    """
    Position of the member on the 128-bit ring.
    """

    hex_position: str
    """
    The identifier as 32 lowercase hex digits, most-significant byte first.
    """

    angle: float
    x: float
    y: float

    owned_entries: int
    """
    Number of entries this member is the primary owner of.
    """

    held_entries: int
    """
    Number of entries this member stores, including replicas.
    """

    @property
    def label(self) -> str:
        return f"{self.hex_position}@{self.data_address}"

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], layout: RingLayout) -> Self:
        """
        Decode a raw node as received on the wire:

            {"Addr": "host:port", "Pos": <base64>, "OwnedEntries": int, "HeldEntries": int}

        Raises DecodeError for a bad position, a missing field or a field of
        the wrong type, and AddressFormatError for a malformed address.
        """
        if not isinstance(raw, Mapping):
            raise DecodeError(f"Node must be a mapping, got {type(raw).__name__}")

        try:
            address = raw["Addr"]
            position = raw["Pos"]
            owned = raw.get("OwnedEntries", 0)
            held = raw.get("HeldEntries", 0)
        except KeyError as ex:
            raise DecodeError(f"Node is missing field {ex.args[0]!r}") from ex

        for name, count in (("OwnedEntries", owned), ("HeldEntries", held)):
            if not isinstance(count, int) or isinstance(count, bool):
                raise DecodeError(f"{name} must be an integer, got {count!r}")

        control_address = derive_control_address(address)
        raw_position = IdentifierCodec.decode_to_bytes(position)
        identifier = IdentifierCodec.decode_to_int(position)
        angle, x, y = layout.place(identifier)

        return cls(
            data_address=address,
            control_address=control_address,
            identifier=identifier,
            hex_position=IdentifierCodec.to_hex(raw_position),
            angle=angle,
            x=x,
            y=y,
            owned_entries=owned,
            held_entries=held,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DecodeFailure:
    """A raw node that was skipped while building a snapshot."""
    index: int | None
    """
    Position of the node in the ``routes`` list, or None for the self
    description.
    """

    raw: Any
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "raw": self.raw, "error": self.error}
