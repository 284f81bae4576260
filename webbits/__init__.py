"""Bit-level input and output streams with unary, gamma, delta, zeta and nibble codes."""

__version__ = "0.1.0"
__all__ = ["tables", "bytesource", "input", "output", "debug"]