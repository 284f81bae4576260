# webbits

Bit-level input and output streams for compact integer encodings.

`webbits` reads and writes streams of bits over files, binary file objects
or in-memory byte arrays. Besides raw bits and fixed-width integers it
supports these instantaneous codes:

- unary (`1` encodes 0, `01` encodes 1, ...)
- Elias γ (gamma) and δ (delta)
- ζ<sub>k</sub> (zeta) codes with any positive shrinking factor `k`
- variable-length nibble codes

Bits are laid out most significant first: the first bit of a stream is
bit 7 of its first byte, the ninth bit is bit 7 of the second byte.

## Writing

```python
from webbits.output import OutputBitStream

with OutputBitStream("numbers.bin") as out:
    out.write_gamma(5)
    out.write_unary(0)
    out.write_zeta(44, 5)
    out.write_delta(1000)
    out.write_int(0b1011, 4)
```

`OutputBitStream(sink, buffer_size=16384)` accepts a file name (opened for
writing and closed by `close()`), a binary file object, or a `bytearray`
that is filled in place and never grows; writing past its end raises
`EOFError`. Bytes bound for a file or stream are gathered in a buffer of
`buffer_size` bytes; 0 writes each byte as soon as it is complete.

Every `write_*` method returns the number of bits it wrote, and
`written_bits` counts them all (it can also be set, for instance reset to
0). Other members:

- `write(bits, length, offset=0)` writes `length` bits of a byte sequence,
  starting at bit `offset`, in stream order;
- `write_bit(bit)` writes a single bit;
- `write_int(x, length)` writes the lower `length` bits (0 to 32) of `x`;
- `align()` pads with zeroes to the next byte boundary and returns the
  number of padding bits;
- `flush()` aligns and pushes buffered bytes to the sink;
- `set_position(position)` flushes and moves to a byte-aligned bit offset
  (the sink must be a `bytearray` or a seekable stream);
- `close()` flushes and closes a file the stream opened itself.

Negative arguments to the coding methods raise `ValueError`.

`most_significant_bit(x)` from the same module gives the index of the
highest set bit of `x`: -1 for zero, and 31 for a negative 32-bit value.

## Reading

```python
from webbits.input import InputBitStream

with InputBitStream("numbers.bin") as bits:
    assert bits.read_gamma() == 5
    assert bits.read_unary() == 0
    assert bits.read_zeta(5) == 44
    assert bits.read_delta() == 1000
    assert bits.read_int(4) == 0b1011
```

`InputBitStream(source, buffer_size=16384)` reads from a file name, a
binary file object or a bytes-like object. Besides the decoders
`read_unary()`, `read_gamma()`, `read_delta()`, `read_zeta(k)` and
`read_nibble()` it offers:

- `read_bit()` and `read_int(length)` (0 to 32 bits);
- `read(length)`, which returns `length` bits packed into `bytes` in
  stream order, the last byte padded with zeroes;
- `skip(n)`, which skips `n` bits and returns how many were skipped;
- `set_position(bit_offset)`, to jump to any bit of the data;
- `align()`, which drops bits up to the next byte boundary;
- `attach(data)`, to start reading a new byte array from scratch;
- `flush()`, which discards prefetched bytes so the underlying stream
  can be repositioned;
- `read_bits`, the number of bits read so far (settable).

Reading past the end of the data raises `EndOfStreamError` (an `EOFError`,
importable from `webbits.input` or `webbits.bytesource`). Setting
`overflow = True` makes the stream return zeroes instead; `past_eof` then
tells whether the end has been passed.

Gamma, delta and ζ<sub>3</sub> codes that fit in eight bits are decoded
through the lookup tables in `webbits.tables` (`GAMMA`, `DELTA`, `ZETA_3`,
`BYTEMSB`); `byte_msb(value)` gives the highest set bit of a byte.

`webbits.bytesource.ByteSource` is the buffered byte reader underneath an
input stream, with `read()`, `skip(n)`, `seek(position)`, `tell()`,
`flush()`, `attach(data)` and `close()`.

## Debugging

`webbits.debug.DebugOutputBitStream(stream, log)` wraps an
`OutputBitStream` and logs each operation to a text stream: `[` on
creation, ` |` for `flush()` and `align()`, ` {bits}` for `write_int`, and
` {U:x}`, ` {g:x}`, ` {d:x}` or ` {zk:x}` for the codes. The writes
themselves go unchanged to the wrapped stream, which makes it easy to
compare two encoders call by call.

## What it does not do

`webbits` is a library only: it has no command-line tool. Integers are
limited to 32 bits in `read_int`/`write_int`; there are no Golomb,
skewed Golomb or minimal binary codes, and bits cannot be pushed back
into an input stream once read.

## Tests

The tests live in `tests/` and use pytest and hypothesis, available
through the `test` extra.