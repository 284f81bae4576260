"""Bit-level output stream with encoders for instantaneous codes."""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Union

__all__ = ["DEFAULT_BUFFER_SIZE", "OutputBitStream", "most_significant_bit"]

DEFAULT_BUFFER_SIZE = 16 * 1024
"""Default size of the write buffer in bytes (16 KiB)."""

_Sink = Union[bytearray, str, os.PathLike, BinaryIO]


def most_significant_bit(x: int) -> int:
    """Return the index of the most significant set bit of ``x``.

    Zero gives -1. A negative 32-bit value has its sign bit set and gives 31.
    """
    if x < 0:
        if x < -(1 << 31):
            raise ValueError(f"{x} does not fit in a 32-bit integer")
        return 31
    return x.bit_length() - 1


class OutputBitStream:
    """Writes bits, fixed-width integers and instantaneous codes as bytes.

    Bits are laid out in stream order: the first bit written is bit 7 of
    the first byte, the eighth is bit 0 of the first byte, and so on.

    ``sink`` may be a :class:`bytearray`, which is filled in place and
    never grows, a file name, which is opened for writing, or a binary
    stream. Bytes for a file or stream are collected in a buffer of
    ``buffer_size`` bytes; a size of 0 writes every byte at once.
    """

    def __init__(self, sink: _Sink, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size < 0:
            raise ValueError(f"buffer size {buffer_size} is negative")
        self._written_bits = 0
        self._current = 0
        self._free = 8
        self._buffer_size = buffer_size
        self._pending = bytearray()
        self._array: bytearray | None = None
        self._pos = 0
        self._stream: BinaryIO | None = None
        self._owns_stream = False
        if isinstance(sink, bytearray):
            self._array = sink
        elif isinstance(sink, (bytes, memoryview)):
            raise TypeError("cannot write into an immutable byte sequence")
        elif isinstance(sink, (str, os.PathLike)):
            self._stream = open(sink, "wb")
            self._owns_stream = True
        elif hasattr(sink, "write"):
            self._stream = sink
        else:
            raise TypeError(f"cannot write bytes to {type(sink).__name__}")

    def __enter__(self) -> OutputBitStream:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def written_bits(self) -> int:
        """Number of bits written so far."""
        return self._written_bits

    @written_bits.setter
    def written_bits(self, value: int) -> None:
        self._written_bits = value

    def close(self) -> None:
        """Flush the stream and close the file if this stream opened it."""
        if self._stream is None and self._array is None:
            return
        self.flush()
        if self._owns_stream and self._stream is not None:
            self._stream.close()
        self._stream = None
        self._owns_stream = False

    def _write_byte(self, byte: int) -> None:
        byte &= 0xFF
        if self._array is not None:
            if self._pos >= len(self._array):
                raise EOFError("no room left in the byte array")
            self._array[self._pos] = byte
            self._pos += 1
            return
        if self._stream is None:
            raise ValueError("the stream is closed")
        if self._buffer_size == 0:
            self._stream.write(bytes((byte,)))
            return
        self._pending.append(byte)
        if len(self._pending) >= self._buffer_size:
            self._stream.write(bytes(self._pending))
            self._pending.clear()

    def _write_in_current(self, bits: int, length: int) -> int:
        self._free -= length
        self._current |= (bits & ((1 << length) - 1)) << self._free
        if self._free == 0:
            self._write_byte(self._current)
            self._free = 8
            self._current = 0
        self._written_bits += length
        return length

    def _put(self, x: int, length: int) -> int:
        """Write the lower ``length`` bits of ``x``, most significant first."""
        remaining = length
        while remaining >= self._free:
            remaining -= self._free
            self._write_in_current(x >> remaining, self._free)
        if remaining:
            self._write_in_current(x, remaining)
        return length

    def flush(self) -> None:
        """Align the stream and push all buffered bytes to the sink."""
        self.align()
        if self._stream is not None:
            if self._pending:
                self._stream.write(bytes(self._pending))
                self._pending.clear()
            self._stream.flush()

    def align(self) -> int:
        """Pad with zeroes up to the next byte boundary; return the padding."""
        if self._free != 8:
            return self._write_in_current(0, self._free)
        return 0

    def set_position(self, position: int) -> None:
        """Move to the given byte-aligned bit offset, flushing first."""
        if position < 0:
            raise ValueError(f"position {position} is negative")
        if position & 7:
            raise ValueError(f"position {position} is not byte-aligned")
        target = position >> 3
        if self._array is not None:
            if target > len(self._array):
                raise ValueError(f"position {position} is beyond the end of the array")
            self.flush()
            self._pos = target
            return
        if self._stream is None:
            raise ValueError("the stream is closed")
        self.flush()
        try:
            seekable = self._stream.seekable()
        except AttributeError:
            seekable = False
        if not seekable:
            raise io.UnsupportedOperation("the underlying stream cannot be repositioned")
        self._stream.seek(target)

    def write(self, bits: bytes | bytearray | memoryview, length: int, offset: int = 0) -> int:
        """Write ``length`` bits of ``bits`` in stream order, starting at bit ``offset``."""
        if length < 0 or offset < 0:
            raise ValueError("length and offset must not be negative")
        data = bytes(bits)
        total = len(data) * 8
        if offset + length > total:
            raise ValueError(f"cannot take {length} bits at offset {offset} from {total} bits")
        if length == 0:
            return 0
        value = int.from_bytes(data, "big") >> (total - offset - length)
        return self._put(value, length)

    def write_bit(self, bit: int | bool) -> int:
        """Write one bit."""
        if bit not in (0, 1):
            raise ValueError(f"{bit!r} is not a bit")
        return self._write_in_current(int(bit), 1)

    def write_int(self, x: int, length: int) -> int:
        """Write the lower ``length`` bits (0 to 32) of ``x``."""
        if not 0 <= length <= 32:
            raise ValueError(f"cannot write {length} bits from an integer")
        return self._put(x, length)

    def write_unary(self, x: int) -> int:
        """Write a natural number in unary coding (1 is 0, 01 is 1, ...)."""
        if x < 0:
            raise ValueError(f"the argument {x} is negative")
        if x < self._free:
            return self._write_in_current(1, x + 1)
        shift = self._free
        rest = x - shift
        self._write_in_current(0, shift)
        for _ in range(rest >> 3):
            self._write_byte(0)
        self._written_bits += rest & ~7
        self._write_in_current(1, (rest & 7) + 1)
        return x + 1

    def write_gamma(self, x: int) -> int:
        """Write a natural number in gamma coding."""
        if x < 0:
            raise ValueError(f"the argument {x} is negative")
        x += 1
        msb = most_significant_bit(x)
        return self.write_unary(msb) + self._put(x, msb)

    def write_delta(self, x: int) -> int:
        """Write a natural number in delta coding."""
        if x < 0:
            raise ValueError(f"the argument {x} is negative")
        x += 1
        msb = most_significant_bit(x)
        return self.write_gamma(msb) + self._put(x, msb)

    def write_zeta(self, x: int, k: int) -> int:
        """Write a natural number in zeta coding with shrinking factor ``k``."""
        if x < 0:
            raise ValueError(f"the argument {x} is negative")
        if k < 1:
            raise ValueError(f"the shrinking factor {k} is not positive")
        x += 1
        h = most_significant_bit(x) // k
        written = self.write_unary(h)
        left = 1 << (h * k)
        if x - left < left:
            return written + self._put(x - left, h * k + k - 1)
        return written + self._put(x, h * k + k)

    def write_nibble(self, x: int) -> int:
        """Write a natural number in variable-length nibble coding."""
        if x < 0:
            raise ValueError(f"the argument {x} is negative")
        if x == 0:
            return self._put(8, 4)
        msb = most_significant_bit(x)
        blocks = msb // 3 + 1
        for h in reversed(range(blocks)):
            self.write_bit(h == 0)
            self._put(x >> (h * 3), 3)
        return blocks << 2