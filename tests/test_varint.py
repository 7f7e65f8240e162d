import pytest

from treebuf.errors import InvalidFormat
from treebuf.varint import (
    decode_prefix_varint,
    decode_suffix_varint,
    encode_prefix_varint,
    encode_suffix_varint,
    size_for_varint,
)

U64_MAX = (1 << 64) - 1
BASIC = [99, 127, 128, 0, 1, 2, 3, U64_MAX]
UP_TO_THREE_BITS = sorted({(1 << a) | (1 << b) | (1 << c) for a in range(64) for b in range(64) for c in range(64)})


def round_trip_prefix(values):
    data = bytearray()
    for value in values:
        encode_prefix_varint(value, data)
    result = []
    offset = 0
    while offset < len(data):
        value, offset = decode_prefix_varint(data, offset)
        result.append(value)
    assert offset == len(data)
    return result


def round_trip_suffix(values):
    data = bytearray()
    for value in values:
        encode_suffix_varint(value, data)
    result = []
    offset = len(data) - 1
    while offset != -1:
        value, offset = decode_suffix_varint(data, offset)
        result.append(value)
    result.reverse()
    return result


def test_prefix_basic():
    assert round_trip_prefix(BASIC) == BASIC


def test_prefix_up_to_three_bits_set():
    assert round_trip_prefix(UP_TO_THREE_BITS) == UP_TO_THREE_BITS


def test_suffix_basic():
    assert round_trip_suffix(BASIC) == BASIC


def test_suffix_up_to_three_bits_set():
    assert round_trip_suffix(UP_TO_THREE_BITS) == UP_TO_THREE_BITS


@pytest.mark.parametrize("value", BASIC + [1 << 56, (1 << 56) - 1, 1 << 49, 1 << 14])
def test_size_matches_encoded_length(value):
    prefix = bytearray()
    suffix = bytearray()
    encode_prefix_varint(value, prefix)
    encode_suffix_varint(value, suffix)
    assert len(prefix) == size_for_varint(value)
    assert len(suffix) == len(prefix)


def test_size_boundaries():
    assert size_for_varint(127) == 1
    assert size_for_varint(128) == 2
    assert size_for_varint(U64_MAX) == 9


def test_prefix_wire_bytes():
    data = bytearray()
    encode_prefix_varint(0, data)
    encode_prefix_varint(127, data)
    assert bytes(data) == b"\x01\xff"


def test_largest_value_wire_bytes():
    prefix = bytearray()
    suffix = bytearray()
    encode_prefix_varint(U64_MAX, prefix)
    encode_suffix_varint(U64_MAX, suffix)
    assert bytes(prefix) == b"\x00" + b"\xff" * 8
    assert bytes(suffix) == b"\xff" * 8 + b"\x00"


def test_suffix_moves_tag_byte_to_end():
    value = 123456789
    prefix = bytearray()
    suffix = bytearray()
    encode_prefix_varint(value, prefix)
    encode_suffix_varint(value, suffix)
    assert bytes(suffix) == bytes(prefix[1:] + prefix[:1])


def test_decode_prefix_at_offset():
    data = bytearray(b"\xaa")
    encode_prefix_varint(300, data)
    assert decode_prefix_varint(data, 1) == (300, len(data))


def test_prefix_empty_is_invalid():
    with pytest.raises(InvalidFormat):
        decode_prefix_varint(b"", 0)


def test_prefix_truncated_is_invalid():
    data = bytearray()
    encode_prefix_varint(U64_MAX, data)
    with pytest.raises(InvalidFormat):
        decode_prefix_varint(bytes(data[:-1]), 0)


def test_suffix_truncated_is_invalid():
    data = bytearray()
    encode_suffix_varint(1 << 20, data)
    with pytest.raises(InvalidFormat):
        decode_suffix_varint(bytes(data[1:]), len(data) - 2)


def test_suffix_offset_out_of_range_is_invalid():
    with pytest.raises(InvalidFormat):
        decode_suffix_varint(b"\x01", -1)


@pytest.mark.parametrize("value", [-1, 1 << 64])
def test_out_of_range_values_are_rejected(value):
    with pytest.raises(ValueError):
        encode_prefix_varint(value, bytearray())