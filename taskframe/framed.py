"""A combined frame reader and writer over an asynchronous byte transport.

The transport given to :class:`Framed` is any object with these coroutine
methods:

* ``read(n)`` returns up to ``n`` bytes, or ``b""`` at end of stream;
* ``write(data)`` writes a prefix of ``data`` and returns its length;
* ``flush()`` flushes the transport;
* ``shutdown()`` closes the writing side.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from taskframe.codec import Decoder, Encoder

_log = logging.getLogger(__name__)

LOW_WATER = 1024
HIGH_WATER = 8 * 1024


class _Flags(enum.Flag):
    NONE = 0
    EOF = enum.auto()
    READABLE = enum.auto()


@dataclass
class FramedParts:
    """The transport, codec and buffers of a :class:`Framed`, taken apart."""

    io: Any
    codec: Any
    read_buf: bytearray = field(default_factory=bytearray)
    write_buf: bytearray = field(default_factory=bytearray)
    _flags: _Flags = field(default=_Flags.NONE, repr=False)

    @classmethod
    def with_read_buf(cls, io: Any, codec: Any, read_buf: bytearray) -> FramedParts:
        """Create parts whose read buffer already holds data."""
        return cls(io, codec, read_buf=read_buf)


class Framed:
    """Reads decoded frames from and writes encoded frames to a transport.

    Frames can be consumed with ``async for`` and written with :meth:`send`.
    """

    def __init__(self, io: Any, codec: Decoder | Encoder) -> None:
        self.io = io
        self.codec = codec
        self._flags = _Flags.NONE
        self._read_buf = bytearray()
        self._write_buf = bytearray()

    @classmethod
    def _assemble(
        cls,
        io: Any,
        codec: Any,
        flags: _Flags,
        read_buf: bytearray,
        write_buf: bytearray,
    ) -> Framed:
        framed = cls.__new__(cls)
        framed.io = io
        framed.codec = codec
        framed._flags = flags
        framed._read_buf = read_buf
        framed._write_buf = write_buf
        return framed

    def is_read_buf_empty(self) -> bool:
        return not self._read_buf

    def is_write_buf_empty(self) -> bool:
        return not self._write_buf

    def is_write_buf_full(self) -> bool:
        return len(self._write_buf) >= HIGH_WATER

    def is_write_ready(self) -> bool:
        """True while the write buffer has room below the high-water mark."""
        return len(self._write_buf) < HIGH_WATER

    def replace_codec(self, codec: Any) -> Framed:
        """Return a framed transport sharing this one's state with another codec."""
        return self._assemble(self.io, codec, self._flags, self._read_buf, self._write_buf)

    def into_map_io(self, func: Callable[[Any], Any]) -> Framed:
        """Return a framed transport whose transport is ``func(self.io)``."""
        return self._assemble(
            func(self.io), self.codec, self._flags, self._read_buf, self._write_buf
        )

    def into_map_codec(self, func: Callable[[Any], Any]) -> Framed:
        """Return a framed transport whose codec is ``func(self.codec)``."""
        return self._assemble(
            self.io, func(self.codec), self._flags, self._read_buf, self._write_buf
        )

    def write(self, item: Any) -> None:
        """Encode ``item`` into the write buffer without touching the transport."""
        self.codec.encode(item, self._write_buf)

    async def next_item(self) -> Any | None:
        """Read from the transport until a frame decodes; ``None`` means the stream ended."""
        while True:
            if _Flags.READABLE in self._flags:
                if _Flags.EOF in self._flags:
                    return self.codec.decode_eof(self._read_buf)

                _log.debug("attempting to decode a frame")
                frame = self.codec.decode(self._read_buf)
                if frame is not None:
                    _log.debug("frame decoded from buffer")
                    return frame
                self._flags &= ~_Flags.READABLE

            data = await self.io.read(HIGH_WATER)
            if data:
                self._read_buf.extend(data)
            else:
                self._flags |= _Flags.EOF
            self._flags |= _Flags.READABLE

    async def flush(self) -> None:
        """Write the whole write buffer to the transport, then flush it.

        Raises ``OSError`` if the transport accepts zero bytes.
        """
        _log.debug("flushing framed transport")
        while self._write_buf:
            _log.debug("writing; remaining=%d", len(self._write_buf))
            written = await self.io.write(bytes(self._write_buf))
            if written == 0:
                raise OSError("failed to write frame to transport")
            del self._write_buf[:written]
        await self.io.flush()
        _log.debug("framed transport flushed")

    async def close(self) -> None:
        """Flush and shut down the transport."""
        await self.io.flush()
        await self.io.shutdown()

    async def ready(self) -> None:
        """Wait until the write buffer has room, flushing it if it is full."""
        if not self.is_write_ready():
            await self.flush()

    async def send(self, item: Any) -> None:
        """Wait for room in the write buffer, then encode ``item`` into it."""
        await self.ready()
        self.write(item)

    def __aiter__(self) -> Framed:
        return self

    async def __anext__(self) -> Any:
        frame = await self.next_item()
        if frame is None:
            raise StopAsyncIteration
        return frame

    @staticmethod
    def from_parts(parts: FramedParts) -> Framed:
        """Build a framed transport from previously taken-apart parts."""
        return Framed._assemble(
            parts.io, parts.codec, parts._flags, parts.read_buf, parts.write_buf
        )

    def into_parts(self) -> FramedParts:
        """Return the transport, codec and unprocessed buffers."""
        return FramedParts(
            self.io, self.codec, self._read_buf, self._write_buf, self._flags
        )

    def __repr__(self) -> str:
        return f"Framed(io={self.io!r}, codec={self.codec!r})"