"""A fixed-capacity buffer and a pool for reusing such buffers."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")

SIZE = 2 * 64 * 1024
"""Size in bytes of the storage behind every buffer."""


def _check_itemsize(itemsize: int) -> None:
    if itemsize <= 0:
        raise ValueError("buffer items must have a positive size")
    if SIZE % itemsize != 0:
        raise ValueError(f"item size {itemsize} does not fit evenly into {SIZE} bytes")


class Buffer(Generic[T]):
    """A list of items whose capacity is fixed by the size of an item."""

    def __init__(self, itemsize: int) -> None:
        _check_itemsize(itemsize)
        self._itemsize = itemsize
        self._items: list[T] = []

    @property
    def itemsize(self) -> int:
        return self._itemsize

    def capacity(self) -> int:
        """The most items the buffer can hold."""
        return SIZE // self._itemsize

    def try_push(self, item: T) -> bool:
        """Append ``item`` if there is room; return whether it was appended."""
        if len(self._items) >= self.capacity():
            return False
        self._items.append(item)
        return True

    def try_extend(self, items: Iterable[T]) -> list[T]:
        """Append as many of ``items`` as fit and return those that did not."""
        items = list(items)
        room = self.capacity() - len(self._items)
        self._items.extend(items[:room])
        return items[room:]

    def clear(self) -> None:
        self._items.clear()

    def transmute_empty(self, itemsize: int) -> Buffer[Any]:
        """Hand the storage over to a new, empty buffer of another item size."""
        if self._items:
            raise ValueError("only an empty buffer can change its item size")
        other: Buffer[Any] = Buffer(itemsize)
        other._items = self._items
        self._items = []
        return other

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"Buffer(itemsize={self._itemsize}, len={len(self._items)})"


class BufferPool:
    """Keeps empty buffers around so they can be taken again later."""

    def __init__(self) -> None:
        self._pool: list[Buffer[int]] = []

    def take(self, itemsize: int) -> Buffer[Any]:
        """Return an empty buffer for items of ``itemsize`` bytes."""
        buffer = self._pool.pop() if self._pool else Buffer(1)
        return buffer.transmute_empty(itemsize)

    def put(self, buffer: Buffer[Any]) -> None:
        """Return an empty buffer to the pool."""
        self._pool.append(buffer.transmute_empty(1))

    def __len__(self) -> int:
        return len(self._pool)