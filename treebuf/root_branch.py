"""The structure of values at the root of a document, outside any array context."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from .array_branch import DynArrayBranch, decode_next_array
from .errors import InvalidFormat
from .wire import Cursor, RootTypeId


@dataclass
class RootObject:
    fields: dict[str, DynRootBranch] = field(default_factory=dict)


@dataclass
class RootTuple:
    fields: list[DynRootBranch] = field(default_factory=list)


@dataclass
class RootEnum:
    discriminant: str
    value: DynRootBranch


@dataclass
class RootArray0:
    """An empty array."""


@dataclass
class RootArray1:
    """An array of one item, kept at root level rather than in an array context."""

    item: DynRootBranch


@dataclass
class RootArray:
    len: int
    values: DynArrayBranch


@dataclass
class RootInteger:
    """An integer; ``signed`` records whether it was stored as a negative value."""

    value: int
    signed: bool

    @classmethod
    def read(cls, cursor: Cursor, length: int, signed: bool) -> RootInteger:
        """Read a little-endian magnitude of ``length`` bytes; signed values are negated."""
        if not 1 <= length <= 8:
            raise ValueError(f"integers are stored in 1 to 8 bytes, not {length}")
        magnitude = int.from_bytes(cursor.take(length), "little")
        return cls(-magnitude if signed else magnitude, signed)


@dataclass
class RootBoolean:
    value: bool


@dataclass
class RootFloat:
    """A float; ``width`` is 32 or 64, or ``None`` for a NaN that suits either."""

    value: float
    width: int | None


@dataclass
class RootVoid:
    """No value."""


@dataclass
class RootString:
    value: str


@dataclass
class RootMap0:
    """An empty map."""


@dataclass
class RootMap1:
    key: DynRootBranch
    value: DynRootBranch


@dataclass
class RootMap:
    len: int
    keys: DynArrayBranch
    values: DynArrayBranch


DynRootBranch = Union[
    RootObject,
    RootTuple,
    RootEnum,
    RootArray0,
    RootArray1,
    RootArray,
    RootInteger,
    RootBoolean,
    RootFloat,
    RootVoid,
    RootString,
    RootMap0,
    RootMap1,
    RootMap,
]

_TUPLE_ARITY = {
    RootTypeId.TUPLE2: 2,
    RootTypeId.TUPLE3: 3,
    RootTypeId.TUPLE4: 4,
    RootTypeId.TUPLE5: 5,
    RootTypeId.TUPLE6: 6,
    RootTypeId.TUPLE7: 7,
    RootTypeId.TUPLE8: 8,
}

_OBJECT_ARITY = {
    RootTypeId.OBJ0: 0,
    RootTypeId.OBJ1: 1,
    RootTypeId.OBJ2: 2,
    RootTypeId.OBJ3: 3,
    RootTypeId.OBJ4: 4,
    RootTypeId.OBJ5: 5,
    RootTypeId.OBJ6: 6,
    RootTypeId.OBJ7: 7,
    RootTypeId.OBJ8: 8,
}

_INTEGERS = {
    RootTypeId.INT_U64: (8, False),
    RootTypeId.INT_U56: (7, False),
    RootTypeId.INT_U48: (6, False),
    RootTypeId.INT_U40: (5, False),
    RootTypeId.INT_U32: (4, False),
    RootTypeId.INT_U24: (3, False),
    RootTypeId.INT_U16: (2, False),
    RootTypeId.INT_U8: (1, False),
    RootTypeId.INT_S64: (8, True),
    RootTypeId.INT_S56: (7, True),
    RootTypeId.INT_S48: (6, True),
    RootTypeId.INT_S40: (5, True),
    RootTypeId.INT_S32: (4, True),
    RootTypeId.INT_S24: (3, True),
    RootTypeId.INT_S16: (2, True),
    RootTypeId.INT_S8: (1, True),
}

_SHORT_STRINGS = {
    RootTypeId.STR0: 0,
    RootTypeId.STR1: 1,
    RootTypeId.STR2: 2,
    RootTypeId.STR3: 3,
}

_MANY_FIELDS_BASE = 9


def _decode_tuple(count: int, cursor: Cursor) -> RootTuple:
    return RootTuple([decode_next_root(cursor) for _ in range(count)])


def _decode_object(count: int, cursor: Cursor) -> RootObject:
    fields: dict[str, DynRootBranch] = {}
    for _ in range(count):
        name = cursor.read_ident()
        fields[name] = decode_next_root(cursor)
    return RootObject(fields)


def _decode_str(length: int, cursor: Cursor) -> RootString:
    raw = cursor.take(length)
    try:
        return RootString(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise InvalidFormat() from None


def decode_next_root(cursor: Cursor) -> DynRootBranch:
    """Decode the structure of the next root value at the cursor."""
    type_id = cursor.read_root_type_id()

    if type_id in _TUPLE_ARITY:
        return _decode_tuple(_TUPLE_ARITY[type_id], cursor)
    if type_id in _OBJECT_ARITY:
        return _decode_object(_OBJECT_ARITY[type_id], cursor)
    if type_id in _INTEGERS:
        length, signed = _INTEGERS[type_id]
        return RootInteger.read(cursor, length, signed)
    if type_id in _SHORT_STRINGS:
        return _decode_str(_SHORT_STRINGS[type_id], cursor)

    match type_id:
        case RootTypeId.VOID:
            return RootVoid()
        case RootTypeId.TUPLE_N:
            return _decode_tuple(cursor.read_prefix_varint() + _MANY_FIELDS_BASE, cursor)
        case RootTypeId.OBJ_N:
            return _decode_object(cursor.read_prefix_varint() + _MANY_FIELDS_BASE, cursor)
        case RootTypeId.ARRAY0:
            return RootArray0()
        case RootTypeId.ARRAY1:
            return RootArray1(decode_next_root(cursor))
        case RootTypeId.ARRAY_N:
            length = cursor.read_usize()
            return RootArray(length, decode_next_array(cursor))
        case RootTypeId.MAP:
            length = cursor.read_usize()
            if length == 0:
                return RootMap0()
            if length == 1:
                key = decode_next_root(cursor)
                return RootMap1(key, decode_next_root(cursor))
            keys = decode_next_array(cursor)
            return RootMap(length, keys, decode_next_array(cursor))
        case RootTypeId.ENUM:
            discriminant = cursor.read_ident()
            return RootEnum(discriminant, decode_next_root(cursor))
        case RootTypeId.TRUE:
            return RootBoolean(True)
        case RootTypeId.FALSE:
            return RootBoolean(False)
        case RootTypeId.ZERO:
            return RootInteger(0, False)
        case RootTypeId.ONE:
            return RootInteger(1, False)
        case RootTypeId.NEG_ONE:
            return RootInteger(-1, True)
        case RootTypeId.F32:
            return RootFloat(struct.unpack("<f", cursor.take(4))[0], 32)
        case RootTypeId.F64:
            return RootFloat(struct.unpack("<d", cursor.take(8))[0], 64)
        case RootTypeId.NAN:
            return RootFloat(float("nan"), None)
        case RootTypeId.STR:
            return _decode_str(cursor.read_prefix_varint(), cursor)
    raise AssertionError(f"unhandled root type id {type_id!r}")


def decode_root(data: bytes) -> DynRootBranch:
    """Decode the structure of a whole document; an empty document is Void."""
    if not data:
        return RootVoid()
    return decode_next_root(Cursor(data))