import pytest
from hypothesis import given
from hypothesis import strategies as st

from webbits.tables import BYTEMSB, DELTA, GAMMA, ZETA_3, byte_msb


@pytest.mark.parametrize("table", [GAMMA, DELTA, ZETA_3, BYTEMSB])
def test_tables_cover_every_byte(table):
    assert len(table) == 256


def test_gamma_rows_from_source():
    assert GAMMA[0:16] == (0,) * 16
    assert GAMMA[16] == 7 << 8 | 7
    assert GAMMA[31] == 7 << 8 | 14
    assert GAMMA[32] == 5 << 8 | 3
    assert all(GAMMA[b] == 3 << 8 | 1 for b in range(64, 96))
    assert all(GAMMA[b] == 3 << 8 | 2 for b in range(96, 128))
    assert all(GAMMA[b] == 1 << 8 | 0 for b in range(128, 256))
    # A gamma code's length follows from its count of leading zeroes.
    for b in range(16, 256):
        leading_zeroes = 7 - byte_msb(b)
        assert GAMMA[b] >> 8 == 2 * leading_zeroes + 1
    assert all(GAMMA[b] == 0 for b in range(256) if byte_msb(b) < 4)


def test_delta_rows_from_source():
    assert DELTA[0:32] == (0,) * 32
    assert DELTA[32:40] == tuple(8 << 8 | v for v in range(7, 15))
    assert DELTA[40:64] == (0,) * 24
    assert all(DELTA[b] == 4 << 8 | 1 for b in range(64, 80))
    assert all(DELTA[b] == 4 << 8 | 2 for b in range(80, 96))
    assert DELTA[96] == 5 << 8 | 3
    assert DELTA[127] == 5 << 8 | 6
    assert all(DELTA[b] == 1 << 8 | 0 for b in range(256) if byte_msb(b) == 7)
    assert all(DELTA[b] == 0 for b in range(256) if byte_msb(b) < 5)


def test_zeta3_rows_from_source():
    assert ZETA_3[0:64] == (0,) * 64
    assert ZETA_3[64] == 7 << 8 | 7
    assert ZETA_3[79] == 7 << 8 | 14
    assert ZETA_3[80] == 8 << 8 | 15
    assert ZETA_3[127] == 8 << 8 | 62
    assert all(ZETA_3[b] == 3 << 8 | 0 for b in range(128, 160))
    assert all(ZETA_3[b] == 4 << 8 | 6 for b in range(240, 256))
    assert all((ZETA_3[b] == 0) == (byte_msb(b) < 6) for b in range(256))


@pytest.mark.parametrize("table", [GAMMA, DELTA, ZETA_3])
def test_entries_depend_only_on_code_prefix(table):
    for byte, entry in enumerate(table):
        if entry == 0:
            continue
        length = entry >> 8
        assert 1 <= length <= 8
        shift = 8 - length
        prefix = byte >> shift
        for other in range(prefix << shift, (prefix + 1) << shift):
            assert table[other] == entry


@pytest.mark.parametrize("table", [GAMMA, DELTA, ZETA_3])
def test_decoded_values_are_distinct_per_prefix(table):
    seen = {}
    for byte, entry in enumerate(table):
        if entry == 0:
            continue
        length = entry >> 8
        key = (length, byte >> (8 - length))
        seen.setdefault(key, entry & 0xFF)
    values = list(seen.values())
    assert len(values) == len(set(values))


def test_byte_msb_pinned_values():
    assert byte_msb(0) == -1
    assert byte_msb(1) == 0
    assert byte_msb(2) == 1
    assert byte_msb(255) == 7
    assert BYTEMSB[0] == -1


@given(st.integers(min_value=1, max_value=255))
def test_byte_msb_brackets_value(value):
    msb = byte_msb(value)
    assert 2**msb <= value < 2 ** (msb + 1)


@pytest.mark.parametrize("value", [-1, 256, 1000])
def test_byte_msb_rejects_non_bytes(value):
    with pytest.raises(ValueError):
        byte_msb(value)