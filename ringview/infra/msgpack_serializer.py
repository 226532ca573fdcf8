import msgpack
from typing import Any

from ringview.core.errors import EventFormatError
from ringview.core.ports.serializer import Serializer


class MsgPackSerializer(Serializer):
    """
    MsgPack codec for event frames.

    Strings are decoded as UTF-8 ``str`` so base64 positions and addresses
    come out as text. A payload that is not a single valid MsgPack object
    raises EventFormatError: the frame is dropped but the stream stays
    usable.
    """
    def serialize(self, message: Any) -> bytes:
        return msgpack.packb(message, use_bin_type=True)

    def deserialize(self, data: bytes) -> Any:
        try:
            return msgpack.unpackb(data, raw=False)
        except (msgpack.UnpackException, msgpack.ExtraData, ValueError) as ex:
            raise EventFormatError(f"Undecodable frame of {len(data)} bytes: {ex}") from ex
