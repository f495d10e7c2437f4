"""Frame encoders and decoders working on mutable byte buffers.

A decoder consumes bytes from the front of a ``bytearray`` and returns one
frame at a time, or ``None`` when more data is needed. An encoder appends the
serialized form of an item to a ``bytearray``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

_LF = ord("\n")
_CR = ord("\r")


class Decoder(ABC):
    """Turns bytes at the front of a buffer into frames."""

    @abstractmethod
    def decode(self, src: bytearray) -> Any | None:
        """Remove one frame from ``src`` and return it, or return ``None`` if incomplete."""

    def decode_eof(self, src: bytearray) -> Any | None:
        """Decode a frame once no more input will arrive.

        Raises ``ValueError`` if bytes remain that do not form a frame.
        """
        frame = self.decode(src)
        if frame is not None:
            return frame
        if not src:
            return None
        raise ValueError("bytes remaining on stream")


class Encoder(ABC):
    """Appends the serialized form of items to a buffer."""

    @abstractmethod
    def encode(self, item: Any, dst: bytearray) -> None:
        """Append ``item`` to ``dst``."""


class BytesCodec(Encoder, Decoder):
    """Reads and writes raw chunks of bytes."""

    def encode(self, item: bytes | bytearray | memoryview, dst: bytearray) -> None:
        dst.extend(item)

    def decode(self, src: bytearray) -> bytes | None:
        if not src:
            return None
        chunk = bytes(src)
        src.clear()
        return chunk

    def __repr__(self) -> str:
        return "BytesCodec()"


class LinesCodec(Encoder, Decoder):
    """Reads and writes line-delimited strings.

    Input is split on LF or CRLF; a carriage return at the end of a line is
    dropped. Invalid UTF-8 raises ``UnicodeDecodeError``.
    """

    def encode(self, item: str, dst: bytearray) -> None:
        dst.extend(item.encode("utf-8"))
        dst.append(_LF)

    def decode(self, src: bytearray) -> str | None:
        if not src:
            return None
        end = src.find(_LF)
        if end < 0:
            return None
        line = bytes(src[:end])
        del src[: end + 1]
        if line.endswith(b"\r"):
            line = line[:-1]
        return line.decode("utf-8")

    def decode_eof(self, src: bytearray) -> str | None:
        frame = self.decode(src)
        if frame is not None:
            return frame
        if not src:
            return None
        if src[-1] == _CR:
            line = bytes(src[:-1])
            del src[:-1]
        else:
            line = bytes(src)
            src.clear()
        if not line:
            return None
        return line.decode("utf-8")

    def __repr__(self) -> str:
        return "LinesCodec()"