import math
import re
from dataclasses import dataclass
from fractions import Fraction

from ringview.core.errors import AddressFormatError
from ringview.core.space.identifier import MAX_IDENTIFIER


BASE_OFFSET = 3 * math.pi / 2
"""Angle of identifier 0: the top of the circle in screen coordinates."""

_ADDRESS_RE = re.compile(r"^(.+):([0-9]+)$")


def derive_control_address(data_address: str) -> str:
    """
    Return the control-plane address paired with a data-plane address.

    Every member serves its status endpoint on the port right after its
    data port: ``"10.0.0.1:9000"`` becomes ``"10.0.0.1:9001"``.
    """
    if not isinstance(data_address, str):
        raise AddressFormatError(
            f"Address must be a string, got {type(data_address).__name__}"
        )

    match = _ADDRESS_RE.fullmatch(data_address)
    if match is None:
        raise AddressFormatError(f"Address {data_address!r} is not host:port")

    host, port = match.groups()
    return f"{host}:{int(port) + 1}"


def compute_angle(identifier: int, max_identifier: int = MAX_IDENTIFIER) -> float:
    """
    Map an identifier to an angle in radians.

    angle = 3π/2 + (identifier / max_identifier) * 2π

    The ratio is kept as an exact Fraction and only converted to float once,
    so the low-order bits of a 128-bit identifier still move the point. The
    result is not wrapped into [0, 2π); use normalize_angle() for that.
    """
    ratio = Fraction(identifier, max_identifier)
    return BASE_OFFSET + float(ratio) * 2 * math.pi


def to_coordinates(
    angle: float,
    center_x: float,
    center_y: float,
    radius: float,
) -> tuple[float, float]:
    return center_x + radius * math.cos(angle), center_y + radius * math.sin(angle)


def normalize_angle(angle: float) -> float:
    """Fold an angle into [0, 2π). Never applied implicitly."""
    return angle % (2 * math.pi)


@dataclass(frozen=True, slots=True)
class RingLayout:
    """
    Fixed parameters of the circular diagram.

    Screen coordinates grow downwards, so increasing identifiers sweep
    clockwise starting from the top of the circle.
    """
    center_x: float = 1000
    center_y: float = 1000
    radius: float = 800
    max_identifier: int = MAX_IDENTIFIER

    def place(self, identifier: int) -> tuple[float, float, float]:
        """Return (angle, x, y) for an identifier on this layout."""
        angle = compute_angle(identifier, self.max_identifier)
        x, y = to_coordinates(angle, self.center_x, self.center_y, self.radius)
        return angle, x, y
