"""Bit-packed encoding of booleans, eight to a byte, least significant bit first."""

from __future__ import annotations

from collections.abc import Iterable, MutableSequence, Sequence


def encode_packed_bool(items: Sequence[bool], into: MutableSequence[int]) -> None:
    """Append ``items`` packed eight to a byte to ``into``.

    A final partial byte is padded with zero bits.
    """
    for start in range(0, len(items), 8):
        chunk = items[start : start + 8]
        into.append(sum(int(bool(item)) << bit for bit, item in enumerate(chunk)))


def decode_packed_bool(data: Iterable[int]) -> list[bool]:
    """Unpack every bit of ``data``; the result holds eight booleans per byte."""
    return [bool((byte >> bit) & 1) for byte in data for bit in range(8)]