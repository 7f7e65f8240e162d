"""Prefix and suffix variable-length encodings of unsigned 64-bit integers.

A prefix varint carries its length as the count of trailing zero bits in its
first byte. A suffix varint holds the same bytes, with the tag byte moved to
the end so that it can be read backwards.
"""

from __future__ import annotations

from collections.abc import MutableSequence

from .errors import InvalidFormat

_U64_LIMIT = 1 << 64


def _check(value: int) -> None:
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"varint value out of the unsigned 64-bit range: {value}")


def size_for_varint(value: int) -> int:
    """Return the number of bytes the varint encoding of ``value`` takes."""
    for length in range(1, 9):
        if value < 1 << (7 * length):
            return length
    return 9


def _prefix_bytes(value: int) -> bytes:
    _check(value)
    length = size_for_varint(value)
    if length == 9:
        return b"\x00" + value.to_bytes(8, "little")
    return ((value << length) | (1 << (length - 1))).to_bytes(length, "little")


def encode_prefix_varint(value: int, into: MutableSequence[int]) -> None:
    """Append the prefix varint encoding of ``value`` to ``into``."""
    into.extend(_prefix_bytes(value))


def encode_suffix_varint(value: int, into: MutableSequence[int]) -> None:
    """Append the suffix varint encoding of ``value`` to ``into``."""
    encoded = _prefix_bytes(value)
    into.extend(encoded[1:])
    into.append(encoded[0])


def _trailing_zeros(byte: int) -> int:
    if byte == 0:
        return 8
    return (byte & -byte).bit_length() - 1


def decode_prefix_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Read a prefix varint at ``offset``; return the value and the next offset."""
    if not 0 <= offset < len(data):
        raise InvalidFormat()
    first = data[offset]
    shift = _trailing_zeros(first)
    if offset + shift >= len(data):
        raise InvalidFormat()
    end = offset + shift + 1
    if shift == 8:
        value = int.from_bytes(bytes(data[offset + 1 : end]), "little")
    else:
        value = int.from_bytes(bytes(data[offset:end]), "little") >> (shift + 1)
    return value, end


def decode_suffix_varint(data: bytes, offset: int) -> tuple[int, int]:
    """Read a suffix varint ending at ``offset``, moving backwards.

    Returns the value and the offset of the last byte of the preceding varint,
    which is -1 once the start of ``data`` has been passed.
    """
    if not 0 <= offset < len(data):
        raise InvalidFormat()
    first = data[offset]
    shift = _trailing_zeros(first)
    if offset < shift:
        raise InvalidFormat()
    body = bytes(data[offset - shift : offset])
    if shift == 8:
        value = int.from_bytes(body, "little")
    else:
        value = int.from_bytes(bytes([first]) + body, "little") >> (shift + 1)
    return value, offset - shift - 1