import math
import random
import struct

import pytest

from treebuf.compress import NotCompressible
from treebuf.errors import InvalidFormat
from treebuf.gorilla import compress, decompress, size_for
from treebuf.wire import ArrayTypeId


def _bits(value):
    return struct.pack("<d", value)


def _compressed(values):
    out = bytearray()
    compress(values, out)
    return bytes(out)


_RNG = random.Random(1234)

DATASETS = [
    [0.0],
    [1.0],
    [1.0, 1.0],
    [1.5, 2.25, -3.0, 1e300, 0.0, -0.0, 5e-324],
    [20.0 + step * 0.25 for step in range(100)],
    [_RNG.uniform(-1e6, 1e6) for _ in range(300)],
    [3.0] * 50 + [4.0] * 50,
    [math.inf, -math.inf, math.nan, 1.0, math.nan],
    [0.0, 1.0, 0.0, 1.0, 0.0],
]


@pytest.mark.parametrize("values", DATASETS)
def test_round_trip(values):
    result = decompress(_compressed(values))
    assert [_bits(v) for v in result] == [_bits(v) for v in values]


@pytest.mark.parametrize("values", DATASETS)
def test_size_for_matches_output(values):
    assert size_for(values) == len(_compressed(values))


def test_single_value_layout():
    assert _compressed([1.0]) == bytes.fromhex("000000000000f03f") + b"\x40"


def test_repeated_value_layout():
    assert _compressed([1.0, 1.0]) == bytes.fromhex("000000000000f03f") + b"\x00\x01"


def test_compress_returns_type_id_and_appends():
    out = bytearray(b"ab")
    assert compress([2.0, 3.0], out) == ArrayTypeId.DOUBLE_GORILLA
    assert out[:2] == b"ab"
    assert decompress(bytes(out[2:])) == [2.0, 3.0]


def test_empty_values_are_not_compressible():
    with pytest.raises(NotCompressible):
        compress([], bytearray())
    with pytest.raises(NotCompressible):
        size_for([])


def test_repeats_compress_well():
    assert len(_compressed([7.5] * 1000)) < 8 * 1000 // 10


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x00" * 5 + b"\x40",
        b"\x00" * 3 + b"\x08",
        b"\x00" * 4 + b"\x41",
        b"\x00\x00\x20",
    ],
)
def test_decompress_rejects_invalid_data(data):
    with pytest.raises(InvalidFormat):
        decompress(data)


def test_decompress_rejects_truncated_stream():
    data = _compressed([1.0, 2.0, 3.5])
    truncated = bytes(data[:8]) + bytes([64])
    with_extra_bit = bytes(data[:8]) + b"\x80\x02"
    assert decompress(truncated) == [1.0]
    with pytest.raises(InvalidFormat):
        decompress(with_extra_bit)