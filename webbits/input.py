"""Bit-level input stream with decoders for instantaneous codes."""

from __future__ import annotations

from types import TracebackType

from .bytesource import DEFAULT_BUFFER_SIZE, ByteSource, EndOfStreamError
from .tables import BYTEMSB, DELTA, GAMMA, ZETA_3

__all__ = ["InputBitStream", "EndOfStreamError"]


class InputBitStream:
    """Reads bits, fixed-width integers and instantaneous codes from bytes.

    Bits are taken in stream order: the first bit is bit 7 of the first
    byte, the eighth bit is bit 0 of the first byte, and so on. Decoded
    integers are returned in the usual way, in the lower bits.

    ``source`` may be a bytes-like object, a file name or a binary stream.
    Reading past the end raises :class:`EndOfStreamError`, unless
    :attr:`overflow` is set, in which case zeroes are returned.
    """

    def __init__(self, source, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._source = ByteSource(source, buffer_size)
        self._read_bits = 0
        self._current = 0
        self._fill = 0

    def __enter__(self) -> InputBitStream:
        return self

    def __exit__(self, *args: type[BaseException] | BaseException | TracebackType | None) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying file if this stream opened it."""
        self._source.close()

    @property
    def overflow(self) -> bool:
        """Whether zeroes are returned instead of raising at the end of data."""
        return self._source.overflow

    @overflow.setter
    def overflow(self, value: bool) -> None:
        self._source.overflow = bool(value)

    @property
    def past_eof(self) -> bool:
        """Whether zeroes are being read past the end of the data."""
        return self._source.past_eof

    @property
    def read_bits(self) -> int:
        """Number of bits read so far."""
        return self._read_bits

    @read_bits.setter
    def read_bits(self, value: int) -> None:
        self._read_bits = value

    def attach(self, data: bytes | bytearray | memoryview) -> None:
        """Read from the given byte array from now on, resetting all state."""
        self._source.attach(data)
        self._source.overflow = False
        self._read_bits = 0
        self._current = 0
        self._fill = 0

    def flush(self) -> None:
        """Discard prefetched bytes and buffered bits.

        After a flush the underlying stream may be repositioned, and the
        next read draws data from it.
        """
        self._source.flush()
        self._fill = 0

    def align(self) -> int:
        """Discard bits up to the next byte boundary; return how many."""
        dropped = self._fill & 7
        if dropped:
            self._read_bits += dropped
            self._fill &= ~7
        return dropped

    def _refill(self) -> None:
        """Top up the bit buffer; a missing second byte is not an error."""
        if self._fill == 0:
            self._current = self._source.read()
            self._fill = 8
        try:
            byte = self._source.read()
        except EndOfStreamError:
            return
        self._current = ((self._current << 8) | byte) & 0xFFFF
        self._fill += 8

    def _read_from_current(self, length: int) -> int:
        if length == self._fill:
            self._read_bits += length
            self._fill = 0
            return self._current & ((1 << length) - 1)
        if self._fill == 0:
            self._current = self._source.read()
            self._fill = 8
        if length > self._fill:
            raise ValueError(f"cannot take {length} bits from a buffer holding {self._fill}")
        self._read_bits += length
        self._fill -= length
        return (self._current >> self._fill) & ((1 << length) - 1)

    def _lookup(self, table: tuple[int, ...]) -> int | None:
        """Decode from a byte table if the code fits in the next eight bits."""
        if self._fill < 8:
            self._refill()
        if self._fill >= 8:
            shift = 8 if self._fill == 16 else self._fill & 7
            entry = table[(self._current >> shift) & 0xFF]
            if entry:
                length = entry >> 8
                self._read_bits += length
                self._fill -= length
                return entry & 0xFF
        return None

    def read(self, length: int) -> bytes:
        """Read ``length`` bits and return them packed in stream order.

        The last byte is padded with zeroes in its lower bits.
        """
        if length < 0:
            raise ValueError(f"cannot read {length} bits")
        full, rest = divmod(length, 8)
        out = bytearray(self.read_int(8) for _ in range(full))
        if rest:
            out.append(self.read_int(rest) << (8 - rest))
        return bytes(out)

    def read_bit(self) -> int:
        """Read one bit."""
        return self._read_from_current(1)

    def read_int(self, length: int) -> int:
        """Read ``length`` bits (0 to 32) as an unsigned integer."""
        if not 0 <= length <= 32:
            raise ValueError(f"cannot read {length} bits into an integer")
        if length <= self._fill:
            return self._read_from_current(length)
        length -= self._fill
        x = self._read_from_current(self._fill)
        for _ in range(length >> 3):
            x = (x << 8) | self._source.read()
        self._read_bits += length & ~7
        length &= 7
        return (x << length) | self._read_from_current(length)

    def skip(self, n: int) -> int:
        """Skip ``n`` bits and return how many were actually skipped."""
        if n < 0:
            raise ValueError(f"cannot skip {n} bits")
        if n <= self._fill:
            self._fill -= n
            self._read_bits += n
            return n
        start = self._read_bits
        n -= self._fill
        self._read_bits += self._fill
        self._fill = 0
        whole = n >> 3
        skipped = self._source.skip(whole)
        self._read_bits += skipped << 3
        if skipped != whole:
            return self._read_bits - start
        residual = n & 7
        if residual:
            self._current = self._source.read()
            self._fill = 8 - residual
            self._read_bits += residual
        return self._read_bits - start

    def set_position(self, position: int) -> None:
        """Move to the given bit offset from the start of the data."""
        if position < 0:
            raise ValueError(f"position {position} is negative")
        self._source.seek(position >> 3)
        self._fill = 0
        residual = position & 7
        if residual:
            self._current = self._source.read()
            self._fill = 8 - residual

    def read_unary(self) -> int:
        """Read a natural number in unary coding (1 is 0, 01 is 1, ...)."""
        if self._fill < 8:
            self._refill()
        aligned = (self._current << (16 - self._fill)) & 0xFFFF
        if aligned:
            if aligned & 0xFF00:
                x = 7 - BYTEMSB[aligned >> 8]
            else:
                x = 15 - BYTEMSB[aligned & 0xFF]
            self._read_bits += x + 1
            self._fill -= x + 1
            return x
        x = self._fill
        while True:
            self._current = self._source.read()
            if self._current:
                break
            if self._source.past_eof:
                raise EndOfStreamError("unary code runs past the end of the data")
            x += 8
        self._fill = BYTEMSB[self._current]
        x += 7 - self._fill
        self._read_bits += x + 1
        return x

    def read_gamma(self) -> int:
        """Read a natural number in gamma coding."""
        value = self._lookup(GAMMA)
        if value is not None:
            return value
        msb = self.read_unary()
        return ((1 << msb) | self.read_int(msb)) - 1

    def read_delta(self) -> int:
        """Read a natural number in delta coding."""
        value = self._lookup(DELTA)
        if value is not None:
            return value
        msb = self.read_gamma()
        return ((1 << msb) | self.read_int(msb)) - 1

    def read_zeta(self, k: int) -> int:
        """Read a natural number in zeta coding with shrinking factor ``k``."""
        if k < 1:
            raise ValueError(f"the shrinking factor {k} is not positive")
        if k == 3:
            value = self._lookup(ZETA_3)
            if value is not None:
                return value
        h = self.read_unary()
        left = 1 << (h * k)
        m = self.read_int(h * k + k - 1)
        if m < left:
            return m + left - 1
        return (m << 1) + self.read_bit() - 1

    def read_nibble(self) -> int:
        """Read a natural number in variable-length nibble coding."""
        x = 0
        while True:
            x <<= 3
            last = self.read_bit()
            x |= self.read_int(3)
            if last:
                return x