"""Gorilla-style XOR compression of 64-bit floats."""

from __future__ import annotations

import struct
from collections.abc import Iterable, MutableSequence

from .compress import NotCompressible
from .errors import InvalidFormat
from .wire import ArrayTypeId

_MASK = (1 << 64) - 1
# Leading zero counts are stored in five bits.
_MAX_LEADING = 31


def _to_bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _from_bits(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits))[0]


def _leading_zeros(bits: int) -> int:
    return 64 - bits.bit_length()


def _trailing_zeros(bits: int) -> int:
    if bits == 0:
        return 64
    return (bits & -bits).bit_length() - 1


def _previous_shape(prev_xor: int) -> tuple[int, int]:
    lz = _leading_zeros(prev_xor)
    tz = 0 if lz == 64 else _trailing_zeros(prev_xor)
    return lz, tz


def size_for(values: Iterable[float]) -> int:
    """Return the exact number of bytes :func:`compress` writes for ``values``."""
    bits_iter = map(_to_bits, values)
    first = next(bits_iter, None)
    if first is None:
        raise NotCompressible("no values to compress")

    # The first value plus the trailing byte holding the final bit count.
    total = 72
    previous = prev_xor = first
    for value in bits_iter:
        xored = previous ^ value
        if xored == 0:
            total += 1
        else:
            lz = min(_leading_zeros(xored), _MAX_LEADING)
            tz = _trailing_zeros(xored)
            prev_lz, prev_tz = _previous_shape(prev_xor)
            if lz >= prev_lz and tz >= prev_tz:
                total += 66 - prev_tz - prev_lz
            else:
                total += 77 - tz - lz
        previous = value
        prev_xor = xored
    return -(-total // 8)


class _BitWriter:
    """Packs bits most significant first into 64-bit words written little-endian."""

    def __init__(self, first: int, out: MutableSequence[int]) -> None:
        self._buffer = first
        self._capacity = 0
        self._out = out

    def write(self, bits: int, count: int) -> None:
        if count <= self._capacity:
            self._buffer ^= (bits << (self._capacity - count)) & _MASK
            self._capacity -= count
            return
        remainder = count - self._capacity
        if remainder != 64:
            self._buffer ^= bits >> remainder
        self._out.extend(self._buffer.to_bytes(8, "little"))
        self._capacity = 64 - remainder
        self._buffer = (bits << self._capacity) & _MASK

    def finish(self) -> None:
        remaining = 64 - self._capacity
        byte_count = -(-remaining // 8)
        self._out.extend(self._buffer.to_bytes(8, "little")[8 - byte_count :])
        self._out.append(remaining)


def compress(values: Iterable[float], into: MutableSequence[int]) -> ArrayTypeId:
    """Append the compressed form of ``values`` to ``into``."""
    bits_iter = map(_to_bits, values)
    first = next(bits_iter, None)
    if first is None:
        raise NotCompressible("no values to compress")

    writer = _BitWriter(first, into)
    previous = prev_xor = first
    for value in bits_iter:
        xored = previous ^ value
        if xored == 0:
            writer.write(0, 1)
        else:
            lz = min(_leading_zeros(xored), _MAX_LEADING)
            tz = _trailing_zeros(xored)
            prev_lz, prev_tz = _previous_shape(prev_xor)
            if lz >= prev_lz and tz >= prev_tz:
                count = 64 - prev_tz - prev_lz
                writer.write(0b10, 2)
                writer.write(xored >> prev_tz, count)
            else:
                count = 64 - tz - lz
                writer.write(0b11, 2)
                writer.write(lz, 5)
                writer.write(count - 1, 6)
                writer.write(xored >> tz, count)
        previous = value
        prev_xor = xored

    writer.finish()
    return ArrayTypeId.DOUBLE_GORILLA


class _BitReader:
    def __init__(self, bits: str) -> None:
        self._bits = bits
        self._pos = 0

    def remaining(self) -> int:
        return len(self._bits) - self._pos

    def read(self, count: int) -> int:
        end = self._pos + count
        if end > len(self._bits):
            raise InvalidFormat("gorilla data ends early")
        chunk = self._bits[self._pos : end]
        self._pos = end
        return int(chunk, 2) if chunk else 0


def _bit_string(data: bytes) -> str:
    if not data:
        raise InvalidFormat("empty gorilla data")
    num_bits = data[-1]
    body = data[:-1]
    if num_bits > 64:
        raise InvalidFormat("invalid bit count in gorilla data")
    last_len = -(-num_bits // 8)
    if last_len > len(body):
        raise InvalidFormat("gorilla data too short")
    split = len(body) - last_len
    words, last_part = body[:split], body[split:]
    if len(words) % 8:
        raise InvalidFormat("gorilla data is not whole words")
    last = int.from_bytes(bytes(8 - last_len) + last_part, "little")
    full = "".join(f"{word:064b}" for (word,) in struct.iter_unpack("<Q", words))
    return full + f"{last:064b}"[:num_bits]


def decompress(data: bytes) -> list[float]:
    """Decode the output of :func:`compress` back into floats."""
    reader = _BitReader(_bit_string(bytes(data)))
    first = reader.read(64)
    values = [_from_bits(first)]
    previous = prev_xor = first

    while reader.remaining():
        if reader.read(1) == 0:
            xored = 0
        else:
            prev_lz, prev_tz = _previous_shape(prev_xor)
            if reader.read(1) == 0:
                count = 64 - prev_tz - prev_lz
                xored = reader.read(count) << prev_tz
            else:
                lz = reader.read(5)
                count = reader.read(6) + 1
                tz = 64 - lz - count
                if tz < 0:
                    raise InvalidFormat("invalid bit counts in gorilla data")
                xored = reader.read(count) << tz
        value = (previous ^ xored) & _MASK
        values.append(_from_bits(value))
        previous = value
        prev_xor = xored
    return values