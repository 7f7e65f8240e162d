"""Choosing among several compressors for a column of values."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

from .options import EncodeOptions
from .stream import EncoderStream
from .wire import ArrayTypeId

# Compressors are ranked on at most this many leading items.
SAMPLE_SIZE = 256


class NotCompressible(ValueError):
    """A compressor cannot encode the data, or another one will surely do better."""


class Compressor(Protocol):
    """One way of encoding a column of values."""

    def fast_size_for(self, data: Sequence[Any], options: EncodeOptions) -> int:
        """Estimate the encoded size of ``data`` without encoding it.

        Raises :class:`NotCompressible` when the data cannot be encoded this
        way, or when another compressor is known to be better.
        """

    def compress(self, data: Sequence[Any], stream: EncoderStream) -> ArrayTypeId:
        """Write ``data`` to ``stream`` and return the type id of the encoding.

        Raises :class:`NotCompressible` when the data cannot be encoded this way.
        """


def compress(data: Sequence[Any], stream: EncoderStream, compressors: Sequence[Compressor]) -> ArrayTypeId:
    """Encode ``data`` with the compressor that does best on a sample of it.

    Compressors are tried from the smallest estimate up; whatever a failing
    compressor wrote is discarded before the next one is tried.
    """
    if not compressors:
        raise NotCompressible("no compressors were given")
    if len(compressors) == 1:
        return compressors[0].compress(data, stream)

    restore_bytes = len(stream.bytes)
    restore_lens = len(stream.lens)
    sample = data[:SAMPLE_SIZE]

    ranked: list[tuple[int, int]] = []
    for index, compressor in enumerate(compressors):
        try:
            ranked.append((compressor.fast_size_for(sample, stream.options), index))
        except NotCompressible:
            continue
    ranked.sort()

    for _, index in ranked:
        try:
            return compressors[index].compress(data, stream)
        except NotCompressible:
            del stream.bytes[restore_bytes:]
            del stream.lens[restore_lens:]

    raise NotCompressible("no compressor could encode the data")


def fast_size_for(data: Sequence[Any], compressors: Sequence[Compressor], options: EncodeOptions) -> int:
    """Return the smallest size estimate among ``compressors`` for ``data``."""
    sizes = []
    for compressor in compressors:
        try:
            sizes.append(compressor.fast_size_for(data, options))
        except NotCompressible:
            continue
    if not sizes:
        raise NotCompressible("no compressor could encode the data")
    return min(sizes)


_rle_state = threading.local()


@contextmanager
def within_rle() -> Iterator[None]:
    """Mark the current thread as inside run-length encoding.

    Run-length encoding does not nest: entering a second time on the same
    thread raises :class:`NotCompressible`.
    """
    if getattr(_rle_state, "active", False):
        raise NotCompressible("run-length encoding does not nest")
    _rle_state.active = True
    try:
        yield
    finally:
        _rle_state.active = False