"""Helpers over sequences: decoding byte-aligned runs and delta coding."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def decode_all(data: bytes, decoder: Callable[[bytes, int], tuple[T, int]]) -> list[T]:
    """Decode every item of a byte-aligned encoding.

    ``decoder`` takes the data and an offset and returns the decoded item
    together with the offset just past it.
    """
    result: list[T] = []
    offset = 0
    while offset < len(data):
        item, offset = decoder(data, offset)
        result.append(item)
    return result


def delta_encode(values: Iterable[int]) -> list[int]:
    """Replace every value after the first with its difference from the previous one."""
    result: list[int] = []
    previous = None
    for value in values:
        result.append(value if previous is None else value - previous)
        previous = value
    return result


def delta_decode(values: Iterable[int]) -> list[int]:
    """Undo :func:`delta_encode` by taking running sums."""
    result: list[int] = []
    for value in values:
        result.append(value + result[-1] if result else value)
    return result