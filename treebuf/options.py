"""Options for encoding and decoding, and the overrides that adjust them."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class EncodeOptions:
    """Settings for an encode.

    ``lossy_float_tolerance`` is a power of two bounding the error allowed when
    floats are stored lossily; ``None`` keeps floats exact.
    """

    lossy_float_tolerance: int | None = None


@dataclass(frozen=True)
class DecodeOptions:
    """Settings for a decode."""

    parallel: bool = True


def _require(options: object, kind: type, override: object) -> None:
    if not isinstance(options, kind):
        raise TypeError(f"{type(override).__name__} applies to {kind.__name__}, not {type(options).__name__}")


@dataclass(frozen=True)
class EnableParallel:
    """Decode independent branches in parallel."""

    def apply(self, options: DecodeOptions) -> DecodeOptions:
        _require(options, DecodeOptions, self)
        return dataclasses.replace(options, parallel=True)


@dataclass(frozen=True)
class DisableParallel:
    """Decode everything on the calling thread."""

    def apply(self, options: DecodeOptions) -> DecodeOptions:
        _require(options, DecodeOptions, self)
        return dataclasses.replace(options, parallel=False)


@dataclass(frozen=True)
class LosslessFloat:
    """Store floats exactly."""

    def apply(self, options: EncodeOptions) -> EncodeOptions:
        _require(options, EncodeOptions, self)
        return dataclasses.replace(options, lossy_float_tolerance=None)


@dataclass(frozen=True)
class LossyFloatTolerance:
    """Allow floats to be stored with an error of up to ``2 ** tolerance``."""

    tolerance: int

    def apply(self, options: EncodeOptions) -> EncodeOptions:
        _require(options, EncodeOptions, self)
        return dataclasses.replace(options, lossy_float_tolerance=self.tolerance)


def encode_options(*args: LosslessFloat | LossyFloatTolerance) -> EncodeOptions:
    """Build encode options from the defaults, applying overrides in order."""
    options = EncodeOptions()
    for override in args:
        options = override.apply(options)
    return options


def decode_options(*args: EnableParallel | DisableParallel) -> DecodeOptions:
    """Build decode options from the defaults, applying overrides in order."""
    options = DecodeOptions()
    for override in args:
        options = override.apply(options)
    return options


def parallel(a: Callable[[], A], b: Callable[[], B], options: DecodeOptions) -> tuple[A, B]:
    """Run ``a`` and ``b``, concurrently when the options allow, and return both results."""
    if not options.parallel:
        return a(), b()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(a)
        second = b()
        first = future.result()
    return first, second