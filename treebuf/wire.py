"""Type ids, identifiers and the cursor that walks a Tree-Buf document."""

from __future__ import annotations

from enum import IntEnum

from .errors import InvalidFormat
from .stream import EncoderStream
from .varint import decode_prefix_varint, decode_suffix_varint, encode_prefix_varint


class RootTypeId(IntEnum):
    """Type ids of values at the root of a document, outside any array."""

    VOID = 0
    ARRAY0 = 1
    ARRAY1 = 2
    ARRAY_N = 3
    TRUE = 4
    FALSE = 5
    INT_U64 = 6
    INT_U56 = 7
    INT_U48 = 8
    INT_U40 = 9
    INT_U32 = 10
    INT_U24 = 11
    INT_U16 = 12
    INT_U8 = 13
    INT_S64 = 14
    INT_S56 = 15
    INT_S48 = 16
    INT_S40 = 17
    INT_S32 = 18
    INT_S24 = 19
    INT_S16 = 20
    INT_S8 = 21
    ZERO = 22
    ONE = 23
    NEG_ONE = 24
    F32 = 25
    F64 = 26
    NAN = 27
    STR0 = 28
    STR1 = 29
    STR2 = 30
    STR3 = 31
    STR = 32
    ENUM = 33
    MAP = 34
    TUPLE2 = 100
    TUPLE3 = 101
    TUPLE4 = 102
    TUPLE5 = 103
    TUPLE6 = 104
    TUPLE7 = 105
    TUPLE8 = 106
    TUPLE_N = 107
    OBJ0 = 108
    OBJ1 = 109
    OBJ2 = 110
    OBJ3 = 111
    OBJ4 = 112
    OBJ5 = 113
    OBJ6 = 114
    OBJ7 = 115
    OBJ8 = 116
    OBJ_N = 117


class ArrayTypeId(IntEnum):
    """Type ids of columns of values inside an array context."""

    VOID = 0
    NULLABLE = 1
    ARRAY_VAR = 2
    PACKED_BOOL = 3
    INT_SIMPLE16 = 4
    INT_PREFIX_VAR = 5
    F32 = 6
    F64 = 7
    UTF8 = 8
    DOUBLE_GORILLA = 9
    MAP = 10
    ENUM = 11
    ARRAY_FIXED = 12
    U8 = 13
    RLE = 14
    ZFP32 = 15
    ZFP64 = 16
    DICTIONARY = 17
    RLE_BOOL_TRUE = 18
    RLE_BOOL_FALSE = 19
    DELTA_ZIG = 20
    BROTLI_UTF8 = 21
    TUPLE2 = 100
    TUPLE3 = 101
    TUPLE4 = 102
    TUPLE5 = 103
    TUPLE6 = 104
    TUPLE7 = 105
    TUPLE8 = 106
    TUPLE_N = 107
    OBJ0 = 108
    OBJ1 = 109
    OBJ2 = 110
    OBJ3 = 111
    OBJ4 = 112
    OBJ5 = 113
    OBJ6 = 114
    OBJ7 = 115
    OBJ8 = 116
    OBJ_N = 117


class Cursor:
    """Reading position in a document.

    Data is read forwards from ``offset``; section lengths are read backwards
    from ``lens``, which starts at the last byte of the document.
    """

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.offset = 0
        self.lens = len(self.data) - 1

    def take(self, count: int) -> bytes:
        """Return the next ``count`` bytes and move past them."""
        end = self.offset + count
        if count < 0 or end > len(self.data):
            raise InvalidFormat()
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def read_prefix_varint(self) -> int:
        value, self.offset = decode_prefix_varint(self.data, self.offset)
        return value

    def read_suffix_varint(self) -> int:
        """Read the next section length from the end of the document."""
        value, self.lens = decode_suffix_varint(self.data, self.lens)
        return value

    def read_usize(self) -> int:
        return self.read_prefix_varint()

    def read_ident(self) -> str:
        """Read a length-prefixed UTF-8 identifier."""
        raw = self.take(self.read_prefix_varint())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidFormat() from None

    def _read_byte(self) -> int:
        return self.take(1)[0]

    def read_root_type_id(self) -> RootTypeId:
        try:
            return RootTypeId(self._read_byte())
        except ValueError:
            raise InvalidFormat() from None

    def read_array_type_id(self) -> ArrayTypeId:
        try:
            return ArrayTypeId(self._read_byte())
        except ValueError:
            raise InvalidFormat() from None

    def __repr__(self) -> str:
        return f"Cursor(len={len(self.data)}, offset={self.offset}, lens={self.lens})"


def encode_ident(value: str, stream: EncoderStream) -> None:
    """Write ``value`` as a length-prefixed UTF-8 identifier."""
    encoded = value.encode("utf-8")
    encode_prefix_varint(len(encoded), stream.bytes)
    stream.bytes.extend(encoded)