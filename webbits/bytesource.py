"""Buffered byte-level reading beneath an input bit stream."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Union

__all__ = ["DEFAULT_BUFFER_SIZE", "ByteSource", "EndOfStreamError"]

DEFAULT_BUFFER_SIZE = 16 * 1024
"""Default size of the read-ahead buffer in bytes (16 KiB)."""

_Source = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]


class EndOfStreamError(EOFError):
    """Raised when a byte is requested past the end of the data."""


class ByteSource:
    """A byte reader over an in-memory array, a file name or a binary stream.

    Bytes from a stream are fetched in blocks of ``buffer_size`` bytes; a
    size of 0 fetches one byte at a time. When :attr:`overflow` is set,
    reading past the end yields zeroes instead of raising
    :class:`EndOfStreamError`, and :attr:`past_eof` becomes true.
    """

    def __init__(self, source: _Source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size < 0:
            raise ValueError(f"buffer size {buffer_size} is negative")
        self.overflow = False
        self._buffer_size = buffer_size
        self._stream: BinaryIO | None = None
        self._owns_stream = False
        self._reset()
        if isinstance(source, (bytes, bytearray, memoryview)):
            self.attach(source)
        elif isinstance(source, (str, os.PathLike)):
            self._stream = open(source, "rb")
            self._owns_stream = True
        elif hasattr(source, "read"):
            self._stream = source
            if self._seekable():
                self._position = source.tell()
        else:
            raise TypeError(f"cannot read bytes from {type(source).__name__}")

    def _reset(self) -> None:
        self._buffer: bytes | memoryview = b""
        self._pos = 0
        self._avail = 0
        self._position = 0
        self._past_eof = False
        self._wrapping = False

    def _seekable(self) -> bool:
        stream = self._stream
        if stream is None:
            return False
        try:
            return bool(stream.seekable())
        except (AttributeError, ValueError):
            return False

    @property
    def past_eof(self) -> bool:
        """Whether zeroes are being returned because the data has ended."""
        return self._past_eof

    @property
    def wrapping(self) -> bool:
        """Whether this source reads from an in-memory array."""
        return self._wrapping

    @property
    def available(self) -> int:
        """Number of bytes that can be read without touching the stream."""
        return self._avail

    def tell(self) -> int:
        """Return the offset of the next byte to be read."""
        return self._position + self._pos

    def attach(self, data: bytes | bytearray | memoryview) -> None:
        """Read from ``data`` from now on, resetting all state."""
        self.close()
        self._reset()
        self._buffer = memoryview(bytes(data))
        self._avail = len(self._buffer)
        self._wrapping = True

    def read(self) -> int:
        """Return the next byte as an integer in 0..255."""
        if self._past_eof:
            return 0
        if self._avail == 0:
            chunk = b""
            if not self._wrapping and self._stream is not None:
                chunk = self._stream.read(self._buffer_size or 1)
            if not chunk:
                if self.overflow:
                    self._past_eof = True
                    return 0
                raise EndOfStreamError("no more bytes to read")
            self._position += self._pos
            self._buffer = chunk
            self._pos = 0
            self._avail = len(chunk)
        self._avail -= 1
        byte = self._buffer[self._pos]
        self._pos += 1
        return byte

    def skip(self, n: int) -> int:
        """Skip up to ``n`` bytes and return how many were actually skipped."""
        if n < 0:
            raise ValueError(f"cannot skip {n} bytes")
        if n <= self._avail:
            self._pos += n
            self._avail -= n
            return n
        skipped = self._avail
        remaining = n - skipped
        self._position += self._pos + self._avail
        self._pos = self._avail = 0
        self._buffer = b""
        if self._wrapping or self._stream is None:
            return skipped
        moved = 0
        if self._seekable():
            current = self._stream.tell()
            end = self._stream.seek(0, io.SEEK_END)
            target = min(current + remaining, end)
            self._stream.seek(target)
            moved = target - current
        else:
            while moved < remaining:
                chunk = self._stream.read(min(remaining - moved, DEFAULT_BUFFER_SIZE))
                if not chunk:
                    break
                moved += len(chunk)
        self._position += moved
        return skipped + moved

    def seek(self, position: int) -> None:
        """Move to the given byte offset."""
        if position < 0:
            raise ValueError(f"position {position} is negative")
        delta = position - self.tell()
        if -self._pos <= delta <= self._avail:
            self._pos += delta
            self._avail -= delta
        elif self._wrapping:
            raise ValueError(f"position {position} is beyond the end of the array")
        else:
            if self._stream is None or not self._seekable():
                raise io.UnsupportedOperation("the underlying stream cannot be repositioned")
            self.flush()
            self._stream.seek(position)
            self._position = position
        self._past_eof = False

    def flush(self) -> None:
        """Discard bytes read ahead from a stream.

        A seekable stream is moved back so that the next read continues at
        :meth:`tell`; afterwards the stream may be repositioned freely.
        """
        if self._wrapping:
            return
        self._position += self._pos
        if self._avail and self._seekable():
            self._stream.seek(self._position)
        self._pos = self._avail = 0
        self._buffer = b""

    def close(self) -> None:
        """Close the underlying file if this source opened it."""
        if self._owns_stream and self._stream is not None:
            self._stream.close()
        self._stream = None
        self._owns_stream = False

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()