"""The output stream that encoders write to."""

from __future__ import annotations

from collections.abc import Callable
from typing import SupportsInt, TypeVar

from .options import EncodeOptions
from .varint import encode_suffix_varint

R = TypeVar("R")
I = TypeVar("I", bound=SupportsInt)


class EncoderStream:
    """Bytes written so far, plus the lengths of length-prefixed sections.

    Section lengths are written after the data, last first, when the stream
    is finished, so that a decoder can read them backwards from the end.
    """

    def __init__(self, options: EncodeOptions | None = None) -> None:
        self.bytes = bytearray()
        self.lens: list[int] = []
        self.options = options if options is not None else EncodeOptions()

    def encode_with_id(self, fn: Callable[[EncoderStream], I]) -> I:
        """Reserve a type-id byte, let ``fn`` write the value, then fill in the id it returns."""
        type_index = len(self.bytes)
        self.bytes.append(0)
        type_id = fn(self)
        code = int(type_id)
        if code == 0 and len(self.bytes) != type_index + 1:
            raise ValueError("a Void value must encode no bytes")
        self.bytes[type_index] = code
        return type_id

    def encode_with_len(self, fn: Callable[[EncoderStream], R]) -> R:
        """Let ``fn`` write a section and record how many bytes it took."""
        start = len(self.bytes)
        result = fn(self)
        self.lens.append(len(self.bytes) - start)
        return result

    def finish(self) -> bytes:
        """Return the complete document: the data followed by the section lengths."""
        out = bytearray(self.bytes)
        for length in reversed(self.lens):
            encode_suffix_varint(length, out)
        return bytes(out)