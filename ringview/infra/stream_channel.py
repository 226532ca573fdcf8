import asyncio
import logging
import struct
from typing import Self

from ringview.core.errors import ChannelError
from ringview.core.models.event import Event, parse_event
from ringview.core.ports.serializer import Serializer


class StreamEventChannel:
    """
    EventChannel reading length-prefixed frames from an asyncio stream.

    Each frame is:

        [4-byte big-endian length][payload]

    The payload is decoded with the given Serializer and must be an event
    envelope ``{"type": ..., "data": ...}``.

    - EOF on a frame boundary ends iteration.
    - EOF inside a frame, a frame above ``max_frame_size``, or a socket
      error raises ChannelError. The stream is unusable afterwards.
    - An undecodable payload or a malformed envelope raises
      EventFormatError; the next frame can still be read.
    """
    _HEADER = struct.Struct("!I")

    def __init__(
        self,
        reader: asyncio.StreamReader,
        serializer: Serializer,
        writer: asyncio.StreamWriter | None = None,
        max_frame_size: int = 1 * 1024 * 1024,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._serializer = serializer
        self._max_frame_size = max_frame_size
        self._logger = logging.getLogger("infra.stream_channel")

    @classmethod
    async def connect(
        cls,
        host: str,
        port: int,
        serializer: Serializer,
        max_frame_size: int = 1 * 1024 * 1024,
    ) -> Self:
        try:
            reader, writer = await asyncio.open_connection(host, port)
        except OSError as ex:
            raise ChannelError(f"Cannot connect to {host}:{port}: {ex}") from ex

        return cls(reader, serializer, writer=writer, max_frame_size=max_frame_size)

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Event:
        header = await self._read_header()
        if header is None:
            raise StopAsyncIteration

        (length,) = self._HEADER.unpack(header)
        if length > self._max_frame_size:
            raise ChannelError(
                f"Frame of {length} bytes exceeds limit of {self._max_frame_size}"
            )

        payload = await self._read_exact(length)
        envelope = self._serializer.deserialize(payload)
        self._logger.debug(f"Received frame of {length} bytes")
        return parse_event(envelope)

    async def close(self) -> None:
        if self._writer is None:
            return

        writer, self._writer = self._writer, None
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError) as ex:
            self._logger.debug(f"Ignoring error while closing stream: {ex}")

    async def _read_header(self) -> bytes | None:
        try:
            return await self._reader.readexactly(self._HEADER.size)
        except asyncio.IncompleteReadError as ex:
            if not ex.partial:
                return None
            raise ChannelError("Connection closed inside a frame header") from ex
        except (ConnectionError, OSError) as ex:
            raise ChannelError(f"Connection lost: {ex}") from ex

    async def _read_exact(self, n: int) -> bytes:
        try:
            return await self._reader.readexactly(n)
        except asyncio.IncompleteReadError as ex:
            raise ChannelError(
                f"Connection closed after {len(ex.partial)} of {n} payload bytes"
            ) from ex
        except (ConnectionError, OSError) as ex:
            raise ChannelError(f"Connection lost: {ex}") from ex
