"""Run-length encoding of a column: a column of distinct values and one of run lengths."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, TypeVar

from .compress import Compressor, NotCompressible, compress, fast_size_for, within_rle
from .options import EncodeOptions
from .stream import EncoderStream
from .wire import ArrayTypeId

T = TypeVar("T")


def rle_decode(runs: Iterable[int], values: Iterable[T]) -> Iterator[T]:
    """Expand runs: each value repeats its run plus one times.

    Values past the end of ``runs`` appear once each.
    """
    run_iter = iter(runs)
    for value in values:
        run = next(run_iter, 0)
        for _ in range(run + 1):
            yield value


def get_runs(data: Sequence[T]) -> tuple[list[int], list[T]]:
    """Split ``data`` into run lengths (each minus one) and the value of each run.

    Raises :class:`NotCompressible` when there are fewer than two items or no
    item repeats its predecessor, since then this encoding cannot help.
    """
    if len(data) < 2:
        raise NotCompressible("too few items for run-length encoding")

    runs: list[int] = []
    values: list[T] = []
    current_value = data[0]
    current_run = 0
    for item in data[1:]:
        if item == current_value:
            current_run += 1
        else:
            runs.append(current_run)
            values.append(current_value)
            current_value = item
            current_run = 0
    runs.append(current_run)
    values.append(current_value)

    if len(values) == len(data):
        raise NotCompressible("no runs to encode")
    return runs, values


class Rle:
    """Compressor that stores runs of equal values once.

    ``sub_compressors`` encode the run values, ``run_compressors`` the run lengths.
    """

    def __init__(self, sub_compressors: Sequence[Compressor], run_compressors: Sequence[Compressor]) -> None:
        self.sub_compressors = list(sub_compressors)
        self.run_compressors = list(run_compressors)

    def fast_size_for(self, data: Sequence[Any], options: EncodeOptions) -> int:
        with within_rle():
            runs, values = get_runs(data)
            from_values = fast_size_for(values, self.sub_compressors, options)
            from_runs = fast_size_for(runs, self.run_compressors, options)
            return 2 + from_runs + from_values

    def compress(self, data: Sequence[Any], stream: EncoderStream) -> ArrayTypeId:
        with within_rle():
            runs, values = get_runs(data)
            stream.encode_with_id(lambda s: compress(values, s, self.sub_compressors))
            stream.encode_with_id(lambda s: compress(runs, s, self.run_compressors))
            return ArrayTypeId.RLE