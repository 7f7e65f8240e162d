"""The structure of array columns in a document, decoded without interpreting values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .wire import ArrayTypeId, Cursor


class ArrayIntegerEncoding(Enum):
    PREFIX_VAR_INT = "PrefixVarInt"
    SIMPLE16 = "Simple16"
    U8 = "U8"
    DELTA_ZIG = "DeltaZig"


class ArrayFloatKind(Enum):
    F64 = "F64"
    F32 = "F32"
    DOUBLE_GORILLA = "DoubleGorilla"
    ZFP32 = "Zfp32"
    ZFP64 = "Zfp64"


@dataclass
class ArrayObject:
    fields: dict[str, DynArrayBranch] = field(default_factory=dict)


@dataclass
class ArrayTuple:
    fields: list[DynArrayBranch] = field(default_factory=list)


@dataclass
class Array0:
    """An array column in which every array is empty."""


@dataclass
class ArrayVar:
    len: DynArrayBranch
    values: DynArrayBranch


@dataclass
class ArrayFixed:
    len: int
    values: DynArrayBranch


@dataclass
class ArrayMap0:
    """A map column in which every map is empty."""


@dataclass
class ArrayMap:
    len: DynArrayBranch
    keys: DynArrayBranch
    values: DynArrayBranch


@dataclass
class ArrayInteger:
    data: bytes = field(repr=False)
    encoding: ArrayIntegerEncoding


@dataclass
class ArrayNullable:
    opt: DynArrayBranch
    values: DynArrayBranch


@dataclass
class PackedBool:
    data: bytes = field(repr=False)


@dataclass
class RleBool:
    first: bool
    runs: DynArrayBranch


@dataclass
class ArrayFloat:
    kind: ArrayFloatKind
    data: bytes = field(repr=False)


@dataclass
class ArrayVoid:
    """A column with no data."""


@dataclass
class ArrayString:
    data: bytes = field(repr=False)


@dataclass
class BrotliUtf8:
    utf8: bytes = field(repr=False)
    lens: DynArrayBranch


@dataclass
class ArrayEnumVariant:
    ident: str
    data: DynArrayBranch


@dataclass
class ArrayEnum:
    discriminants: DynArrayBranch
    variants: list[ArrayEnumVariant] = field(default_factory=list)


@dataclass
class ArrayRle:
    runs: DynArrayBranch
    values: DynArrayBranch


@dataclass
class ArrayDictionary:
    indices: DynArrayBranch
    values: DynArrayBranch


DynArrayBranch = Union[
    ArrayObject,
    ArrayTuple,
    Array0,
    ArrayVar,
    ArrayFixed,
    ArrayMap0,
    ArrayMap,
    ArrayInteger,
    ArrayNullable,
    PackedBool,
    RleBool,
    ArrayFloat,
    ArrayVoid,
    ArrayString,
    BrotliUtf8,
    ArrayEnum,
    ArrayRle,
    ArrayDictionary,
]

_TUPLE_ARITY = {
    ArrayTypeId.TUPLE2: 2,
    ArrayTypeId.TUPLE3: 3,
    ArrayTypeId.TUPLE4: 4,
    ArrayTypeId.TUPLE5: 5,
    ArrayTypeId.TUPLE6: 6,
    ArrayTypeId.TUPLE7: 7,
    ArrayTypeId.TUPLE8: 8,
}

_OBJECT_ARITY = {
    ArrayTypeId.OBJ0: 0,
    ArrayTypeId.OBJ1: 1,
    ArrayTypeId.OBJ2: 2,
    ArrayTypeId.OBJ3: 3,
    ArrayTypeId.OBJ4: 4,
    ArrayTypeId.OBJ5: 5,
    ArrayTypeId.OBJ6: 6,
    ArrayTypeId.OBJ7: 7,
    ArrayTypeId.OBJ8: 8,
}

_INTEGER_ENCODINGS = {
    ArrayTypeId.INT_SIMPLE16: ArrayIntegerEncoding.SIMPLE16,
    ArrayTypeId.INT_PREFIX_VAR: ArrayIntegerEncoding.PREFIX_VAR_INT,
    ArrayTypeId.U8: ArrayIntegerEncoding.U8,
    ArrayTypeId.DELTA_ZIG: ArrayIntegerEncoding.DELTA_ZIG,
}

_FLOAT_KINDS = {
    ArrayTypeId.F32: ArrayFloatKind.F32,
    ArrayTypeId.F64: ArrayFloatKind.F64,
    ArrayTypeId.ZFP32: ArrayFloatKind.ZFP32,
    ArrayTypeId.ZFP64: ArrayFloatKind.ZFP64,
    ArrayTypeId.DOUBLE_GORILLA: ArrayFloatKind.DOUBLE_GORILLA,
}

# Counts above the fixed-arity ids are stored as a varint offset by this amount.
_MANY_FIELDS_BASE = 9


def _bytes_from_len(cursor: Cursor) -> bytes:
    return cursor.take(cursor.read_suffix_varint())


def _decode_tuple(count: int, cursor: Cursor) -> ArrayTuple:
    return ArrayTuple([decode_next_array(cursor) for _ in range(count)])


def _decode_object(count: int, cursor: Cursor) -> ArrayObject:
    fields: dict[str, DynArrayBranch] = {}
    for _ in range(count):
        name = cursor.read_ident()
        fields[name] = decode_next_array(cursor)
    return ArrayObject(fields)


def decode_next_array(cursor: Cursor) -> DynArrayBranch:
    """Decode the structure of the next array column at the cursor."""
    type_id = cursor.read_array_type_id()

    if type_id in _TUPLE_ARITY:
        return _decode_tuple(_TUPLE_ARITY[type_id], cursor)
    if type_id in _OBJECT_ARITY:
        return _decode_object(_OBJECT_ARITY[type_id], cursor)
    if type_id in _INTEGER_ENCODINGS:
        return ArrayInteger(_bytes_from_len(cursor), _INTEGER_ENCODINGS[type_id])
    if type_id in _FLOAT_KINDS:
        return ArrayFloat(_FLOAT_KINDS[type_id], _bytes_from_len(cursor))

    match type_id:
        case ArrayTypeId.VOID:
            return ArrayVoid()
        case ArrayTypeId.NULLABLE:
            opt = decode_next_array(cursor)
            return ArrayNullable(opt, decode_next_array(cursor))
        case ArrayTypeId.TUPLE_N:
            return _decode_tuple(cursor.read_prefix_varint() + _MANY_FIELDS_BASE, cursor)
        case ArrayTypeId.OBJ_N:
            return _decode_object(cursor.read_prefix_varint() + _MANY_FIELDS_BASE, cursor)
        case ArrayTypeId.ARRAY_VAR:
            length = decode_next_array(cursor)
            if isinstance(length, ArrayVoid):
                return Array0()
            return ArrayVar(length, decode_next_array(cursor))
        case ArrayTypeId.ARRAY_FIXED:
            length = cursor.read_usize()
            return ArrayFixed(length, decode_next_array(cursor))
        case ArrayTypeId.MAP:
            length = decode_next_array(cursor)
            if isinstance(length, ArrayVoid):
                return ArrayMap0()
            keys = decode_next_array(cursor)
            return ArrayMap(length, keys, decode_next_array(cursor))
        case ArrayTypeId.PACKED_BOOL:
            return PackedBool(_bytes_from_len(cursor))
        case ArrayTypeId.RLE_BOOL_TRUE | ArrayTypeId.RLE_BOOL_FALSE:
            first = type_id is ArrayTypeId.RLE_BOOL_TRUE
            return RleBool(first, decode_next_array(cursor))
        case ArrayTypeId.UTF8:
            return ArrayString(_bytes_from_len(cursor))
        case ArrayTypeId.BROTLI_UTF8:
            utf8 = _bytes_from_len(cursor)
            return BrotliUtf8(utf8, decode_next_array(cursor))
        case ArrayTypeId.ENUM:
            count = cursor.read_prefix_varint()
            discriminants = decode_next_array(cursor)
            variants = []
            for _ in range(count):
                ident = cursor.read_ident()
                variants.append(ArrayEnumVariant(ident, decode_next_array(cursor)))
            return ArrayEnum(discriminants, variants)
        case ArrayTypeId.RLE:
            values = decode_next_array(cursor)
            return ArrayRle(runs=decode_next_array(cursor), values=values)
        case ArrayTypeId.DICTIONARY:
            values = decode_next_array(cursor)
            return ArrayDictionary(indices=decode_next_array(cursor), values=values)
    raise AssertionError(f"unhandled array type id {type_id!r}")