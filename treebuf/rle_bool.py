"""Run-length encoding of booleans as alternating runs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .wire import ArrayTypeId

# Below this many items packed booleans are always at least as small.
_MIN_ITEMS = 25


def decode_rle_bool(runs: Iterable[int], first: bool) -> list[bool]:
    """Expand alternating runs starting with ``first``; each run holds its value plus one."""
    result: list[bool] = []
    current = bool(first)
    for run in runs:
        result.extend([current] * (run + 1))
        current = not current
    return result


def bool_runs_and_id(items: Sequence[bool]) -> tuple[list[int], ArrayTypeId]:
    """Split ``items`` into runs and pick the type id that names the first value.

    Each run is stored as its length minus one. Raises ``ValueError`` when there
    are too few items for this encoding to be worthwhile.
    """
    if len(items) < _MIN_ITEMS:
        raise ValueError(f"run-length boolean encoding needs at least {_MIN_ITEMS} items")

    current = bool(items[0])
    type_id = ArrayTypeId.RLE_BOOL_TRUE if current else ArrayTypeId.RLE_BOOL_FALSE
    runs: list[int] = []
    run = 0
    for item in items[1:]:
        if bool(item) == current:
            run += 1
        else:
            current = bool(item)
            runs.append(run)
            run = 0
    runs.append(run)
    return runs, type_id