"""Byte-indexed lookup tables used to decode instantaneous codes quickly.

Each decoding table maps the next eight bits of a stream (most significant
bit first) to an entry whose bits 0-7 hold the decoded value and bits 8-15
hold the length of the code in bits. An entry of 0 means the code does not
fit in eight bits, so the slow decoding path must be taken.
"""

from __future__ import annotations

from collections.abc import Callable

__all__ = ["BYTEMSB", "DELTA", "GAMMA", "ZETA_3", "byte_msb"]


class _Overrun(Exception):
    """Raised when a code needs more bits than the window holds."""


class _Window:
    """An eight-bit window read from the most significant bit down."""

    def __init__(self, byte: int) -> None:
        self._byte = byte
        self.consumed = 0

    def read_bit(self) -> int:
        if self.consumed >= 8:
            raise _Overrun
        self.consumed += 1
        return (self._byte >> (8 - self.consumed)) & 1

    def read_int(self, length: int) -> int:
        value = 0
        for _ in range(length):
            value = (value << 1) | self.read_bit()
        return value

    def read_unary(self) -> int:
        count = 0
        while self.read_bit() == 0:
            count += 1
        return count


def _gamma(window: _Window) -> int:
    msb = window.read_unary()
    return ((1 << msb) | window.read_int(msb)) - 1


def _delta(window: _Window) -> int:
    msb = _gamma(window)
    return ((1 << msb) | window.read_int(msb)) - 1


def _zeta3(window: _Window) -> int:
    k = 3
    h = window.read_unary()
    left = 1 << (h * k)
    m = window.read_int(h * k + k - 1)
    if m < left:
        return m + left - 1
    return (m << 1) + window.read_bit() - 1


def _build(decoder: Callable[[_Window], int]) -> tuple[int, ...]:
    entries = []
    for byte in range(256):
        window = _Window(byte)
        try:
            value = decoder(window)
        except _Overrun:
            entries.append(0)
        else:
            entries.append(window.consumed << 8 | value)
    return tuple(entries)


GAMMA: tuple[int, ...] = _build(_gamma)
"""Precomputed byte parsing for gamma coding."""

DELTA: tuple[int, ...] = _build(_delta)
"""Precomputed byte parsing for delta coding."""

ZETA_3: tuple[int, ...] = _build(_zeta3)
"""Precomputed byte parsing for zeta coding with shrinking factor 3."""

BYTEMSB: tuple[int, ...] = tuple(value.bit_length() - 1 for value in range(256))
"""Index of the most significant set bit of each byte; -1 for zero."""


def byte_msb(value: int) -> int:
    """Return the index of the most significant set bit of a byte, or -1 for 0."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{value} is not a byte value")
    return BYTEMSB[value]