"""Dictionary encoding of a column: distinct values once, plus an index per item."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from typing import Any, TypeVar

from .compress import Compressor, NotCompressible, compress, fast_size_for
from .errors import InvalidFormat
from .options import EncodeOptions
from .stream import EncoderStream
from .wire import ArrayTypeId

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def dictionary_decode(indices: Iterable[int], values: Iterable[T]) -> list[T]:
    """Look every index up in ``values``.

    An index past the end of ``values`` raises :class:`InvalidFormat`.
    """
    table = list(values)
    result: list[T] = []
    for index in indices:
        if not 0 <= index < len(table):
            raise InvalidFormat(f"dictionary index {index} out of range")
        result.append(table[index])
    return result


def get_lookup_table(data: Sequence[H]) -> tuple[list[int], list[H]]:
    """Return the index of every item and the distinct values in order of first use.

    Raises :class:`NotCompressible` when there are fewer than two items or no
    value repeats, since then this encoding cannot help.
    """
    if len(data) < 2:
        raise NotCompressible("too few items for dictionary encoding")

    lookup: dict[H, int] = {}
    indices = [lookup.setdefault(value, len(lookup)) for value in data]
    values = list(lookup)

    if len(values) == len(indices):
        raise NotCompressible("no repeated values to encode")
    return indices, values


class Dictionary:
    """Compressor that stores each distinct value once.

    ``sub_compressors`` encode the distinct values, ``index_compressors`` the indices.
    """

    def __init__(self, sub_compressors: Sequence[Compressor], index_compressors: Sequence[Compressor]) -> None:
        self.sub_compressors = list(sub_compressors)
        self.index_compressors = list(index_compressors)

    def fast_size_for(self, data: Sequence[Any], options: EncodeOptions) -> int:
        indices, values = get_lookup_table(data)
        from_values = fast_size_for(values, self.sub_compressors, options)
        from_indices = fast_size_for(indices, self.index_compressors, options)
        return 2 + from_indices + from_values

    def compress(self, data: Sequence[Any], stream: EncoderStream) -> ArrayTypeId:
        indices, values = get_lookup_table(data)
        stream.encode_with_id(lambda s: compress(values, s, self.sub_compressors))
        stream.encode_with_id(lambda s: compress(indices, s, self.index_compressors))
        return ArrayTypeId.DICTIONARY