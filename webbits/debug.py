"""An output bit stream wrapper that logs every coding operation."""

from __future__ import annotations

from typing import TextIO

from .output import OutputBitStream

__all__ = ["DebugOutputBitStream"]


def _to_binary(x: int, length: int) -> str:
    """Return the lower ``length`` bits of ``x`` as a binary string."""
    if length <= 0:
        return ""
    return format(x & ((1 << length) - 1), f"0{length}b")


class DebugOutputBitStream:
    """Wraps an :class:`OutputBitStream` and logs each write to a text stream.

    The writes themselves behave exactly as on the wrapped stream. The log
    uses a compact notation:

    ``[``
        creation;
    `` |``
        a flush or an alignment;
    ``{bits}``
        explicit bits written with :meth:`write_int`;
    ``{M:x}``
        ``x`` written with coding ``M``: ``U`` (unary), ``g`` (gamma),
        ``d`` (delta) or ``z`` followed by the shrinking factor (zeta).
    """

    def __init__(self, stream: OutputBitStream, log: TextIO) -> None:
        self.stream = stream
        self._log = log
        self._log.write("[")

    @property
    def written_bits(self) -> int:
        """Number of bits written to the wrapped stream."""
        return self.stream.written_bits

    def flush(self) -> None:
        """Log and flush the wrapped stream."""
        self._log.write(" |")
        self.stream.flush()

    def align(self) -> int:
        """Log and align the wrapped stream; return the number of padding bits."""
        self._log.write(" |")
        return self.stream.align()

    def write_int(self, x: int, length: int) -> int:
        """Log the explicit bits and write them to the wrapped stream."""
        self._log.write(f" {{{_to_binary(x, length)}}}\n")
        return self.stream.write_int(x, length)

    def write_unary(self, x: int) -> int:
        """Log and write ``x`` in unary coding."""
        self._log.write(f" {{U:{x}}}\n")
        return self.stream.write_unary(x)

    def write_gamma(self, x: int) -> int:
        """Log and write ``x`` in gamma coding."""
        self._log.write(f" {{g:{x}}}\n")
        return self.stream.write_gamma(x)

    def write_delta(self, x: int) -> int:
        """Log and write ``x`` in delta coding."""
        self._log.write(f" {{d:{x}}}\n")
        return self.stream.write_delta(x)

    def write_zeta(self, x: int, k: int) -> int:
        """Log and write ``x`` in zeta coding with shrinking factor ``k``."""
        self._log.write(f" {{z{k}:{x}}}\n")
        return self.stream.write_zeta(x, k)