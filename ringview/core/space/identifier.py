import base64
import binascii
import re
import string

from ringview.core.errors import DecodeError


IDENTIFIER_BYTES = 16
MAX_IDENTIFIER = 1 << (IDENTIFIER_BYTES * 8)

_BASE64_DIGITS = {
    digit: index
    for index, digit in enumerate(
        string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
    )
}
_BASE64_RE = re.compile(r"[A-Za-z0-9+/]*={0,2}")


class IdentifierCodec:
    """
    Converts ring positions between their wire, byte, integer and hex forms.

    A ring position is a 128-bit unsigned integer. On the wire it travels as
    the standard base64 encoding of its 16 big-endian bytes, which is how the
    topology source serializes raw byte arrays into JSON. Operators read it as
    a 32-character lowercase hex string.

    The integer and byte decoders are independent code paths over the same
    input; they always agree bit for bit.
    """

    @staticmethod
    def decode_to_bytes(encoded: str) -> bytes:
        """
        Decode a wire value into its 16 raw bytes.

        Raises DecodeError if the value is not valid base64 or does not
        decode to exactly 16 bytes.
        """
        if not isinstance(encoded, str):
            raise DecodeError(
                f"Position must be a base64 string, got {type(encoded).__name__}"
            )

        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as ex:
            raise DecodeError(f"Position {encoded!r} is not valid base64: {ex}") from ex

        if len(raw) != IDENTIFIER_BYTES:
            raise DecodeError(
                f"Position {encoded!r} decodes to {len(raw)} bytes, "
                f"expected {IDENTIFIER_BYTES}"
            )
        return raw

    @staticmethod
    def decode_to_int(encoded: str) -> int:
        """
        Decode a wire value into the integer position in [0, 2^128).

        Folds the base64 digits straight into an integer, six bits at a
        time, without going through the byte form. The trailing bits that
        padding leaves over are dropped, as a base64 decoder does.
        """
        if not isinstance(encoded, str):
            raise DecodeError(
                f"Position must be a base64 string, got {type(encoded).__name__}"
            )
        if not _BASE64_RE.fullmatch(encoded) or len(encoded) % 4:
            raise DecodeError(f"Position {encoded!r} is not valid base64")

        digits = encoded.rstrip("=")
        size, spare_bits = divmod(len(digits) * 6, 8)
        if size != IDENTIFIER_BYTES:
            raise DecodeError(
                f"Position {encoded!r} decodes to {size} bytes, "
                f"expected {IDENTIFIER_BYTES}"
            )

        value = 0
        for digit in digits:
            value = (value << 6) | _BASE64_DIGITS[digit]
        return value >> spare_bits

    @staticmethod
    def to_hex(raw: bytes) -> str:
        """
        Render raw position bytes as lowercase hex, left-padded with zeros
        to 32 characters. Shorter inputs are treated as the low-order bytes
        of the position.
        """
        return "".join(f"{byte:02x}" for byte in raw).rjust(IDENTIFIER_BYTES * 2, "0")

    @staticmethod
    def encode(value: bytes | int) -> str:
        """Encode 16 raw bytes, or an integer position, as a wire value."""
        if isinstance(value, int):
            if not 0 <= value < MAX_IDENTIFIER:
                raise DecodeError(f"Position {value} is outside [0, 2^128)")
            value = value.to_bytes(IDENTIFIER_BYTES, "big")

        if len(value) != IDENTIFIER_BYTES:
            raise DecodeError(
                f"Position has {len(value)} bytes, expected {IDENTIFIER_BYTES}"
            )
        return base64.b64encode(value).decode("ascii")
