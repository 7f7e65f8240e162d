"""Report how the bytes of a Tree-Buf document are spent."""

from __future__ import annotations

from dataclasses import dataclass

from .array_branch import (
    Array0,
    ArrayDictionary,
    ArrayEnum,
    ArrayFixed,
    ArrayFloat,
    ArrayFloatKind,
    ArrayInteger,
    ArrayIntegerEncoding,
    ArrayMap,
    ArrayMap0,
    ArrayNullable,
    ArrayObject,
    ArrayRle,
    ArrayString,
    ArrayTuple,
    ArrayVar,
    ArrayVoid,
    BrotliUtf8,
    DynArrayBranch,
    PackedBool,
    RleBool,
)
from .errors import InvalidFormat
from .root_branch import (
    DynRootBranch,
    RootArray,
    RootArray1,
    RootEnum,
    RootMap,
    RootMap1,
    RootObject,
    RootTuple,
    decode_root,
)

_FLOAT_LABELS = {
    ArrayFloatKind.DOUBLE_GORILLA: "Gorilla",
    ArrayFloatKind.F32: "Fixed F32",
    ArrayFloatKind.F64: "Fixed F64",
    ArrayFloatKind.ZFP32: "Zfp 64",
    ArrayFloatKind.ZFP64: "Zfp 32",
}

_INTEGER_LABELS = {
    ArrayIntegerEncoding.PREFIX_VAR_INT: "Prefix Varint",
    ArrayIntegerEncoding.SIMPLE16: "Simple16",
    ArrayIntegerEncoding.U8: "U8 Fixed",
    ArrayIntegerEncoding.DELTA_ZIG: "DeltaZig",
}


def _join(prefix: str, part: object) -> str:
    text = str(part)
    if not prefix:
        return text
    if not text:
        return prefix
    return f"{prefix}.{text}"


@dataclass(frozen=True)
class _Path:
    names: str = ""
    types: str = ""

    def a(self, name: object, type_id: object) -> _Path:
        return _Path(_join(self.names, name), _join(self.types, type_id))


@dataclass
class _PathAggregation:
    types: str
    size: int


@dataclass
class _TypeAggregation:
    size: int = 0
    count: int = 0


class _SizeBreakdown:
    def __init__(self, total: int) -> None:
        self.by_path: dict[str, _PathAggregation] = {}
        self.by_type: dict[str, _TypeAggregation] = {}
        self.total = total

    def add(self, path: _Path, type_id: str, data: bytes) -> None:
        size = len(data)
        aggregation = self.by_type.setdefault(type_id, _TypeAggregation())
        aggregation.count += 1
        aggregation.size += size
        if path.names in self.by_path:
            raise InvalidFormat(f"Duplicate path in document: {path.names!r}")
        self.by_path[path.names] = _PathAggregation(_join(path.types, type_id), size)

    def __str__(self) -> str:
        by_path = sorted(self.by_path.items(), key=lambda item: -item[1].size)
        by_type = sorted(self.by_type.items(), key=lambda item: -item[1].size)

        lines = ["Largest by path:"]
        for path, agg in by_path:
            lines.append(f"\t{agg.size}\n\t   {path}\n\t   {agg.types}")
        lines.append("")
        lines.append("Largest by type:")
        for type_id, agg in by_type:
            lines.append(f"\t {agg.count}x {agg.size} @ {type_id}")
        accounted = sum(agg.size for _, agg in by_type)
        lines.append("")
        lines.append(f"Other: {self.total - accounted}")
        lines.append(f"Total: {self.total}")
        return "\n".join(lines) + "\n"


def _visit_array(path: _Path, branch: DynArrayBranch, breakdown: _SizeBreakdown) -> None:
    match branch:
        case ArrayFixed(len=length, values=values):
            _visit_array(path.a(f"[{length}]", "Array Fixed"), values, breakdown)
        case ArrayVar(len=length, values=values):
            _visit_array(path.a("len", "Array"), length, breakdown)
            _visit_array(path.a("values", "Array"), values, breakdown)
        case ArrayEnum(discriminants=discriminants, variants=variants):
            _visit_array(path.a("discriminants", "Enum"), discriminants, breakdown)
            for variant in variants:
                _visit_array(path.a(variant.ident, "Enum"), variant.data, breakdown)
        case PackedBool(data=data):
            breakdown.add(path, "Packed Boolean", data)
        case RleBool(runs=runs):
            _visit_array(path.a("runs", "Bool RLE"), runs, breakdown)
        case ArrayFloat(kind=kind, data=data):
            breakdown.add(path, _FLOAT_LABELS[kind], data)
        case ArrayInteger(data=data, encoding=encoding):
            breakdown.add(path, _INTEGER_LABELS[encoding], data)
        case ArrayMap(len=length, keys=keys, values=values):
            _visit_array(path.a("len", "Map"), length, breakdown)
            _visit_array(path.a("keys", "Map"), keys, breakdown)
            _visit_array(path.a("values", "Map"), values, breakdown)
        case ArrayObject(fields=fields):
            for name, child in fields.items():
                _visit_array(path.a(name, "Object"), child, breakdown)
        case ArrayRle(runs=runs, values=values):
            _visit_array(path.a("runs", "RLE"), runs, breakdown)
            _visit_array(path.a("values", "RLE"), values, breakdown)
        case ArrayDictionary(indices=indices, values=values):
            _visit_array(path.a("indices", "Dictionary"), indices, breakdown)
            _visit_array(path.a("values", "Dictionary"), values, breakdown)
        case ArrayString(data=data):
            breakdown.add(path, "UTF-8", data)
        case BrotliUtf8(utf8=utf8, lens=lens):
            breakdown.add(path, "BrotliUtf8", utf8)
            _visit_array(path.a("lens", "Dictionary"), lens, breakdown)
        case ArrayTuple(fields=fields):
            for index, child in enumerate(fields):
                _visit_array(path.a(index, "Tuple"), child, breakdown)
        case ArrayNullable(opt=opt, values=values):
            _visit_array(path.a("opt", "Nullable"), opt, breakdown)
            _visit_array(path.a("values", "Nullable"), values, breakdown)
        case ArrayVoid() | ArrayMap0() | Array0():
            pass


def _visit(path: _Path, branch: DynRootBranch, breakdown: _SizeBreakdown) -> None:
    match branch:
        case RootObject(fields=fields):
            for name, child in fields.items():
                _visit(path.a(name, "Object"), child, breakdown)
        case RootEnum(discriminant=discriminant, value=value):
            _visit(path.a(discriminant, "Enum"), value, breakdown)
        case RootMap(keys=keys, values=values):
            _visit_array(path.a("keys", "Map"), keys, breakdown)
            _visit_array(path.a("values", "Values"), values, breakdown)
        case RootTuple(fields=fields):
            for index, child in enumerate(fields):
                _visit(path.a(index, "Tuple"), child, breakdown)
        case RootMap1(key=key, value=value):
            _visit(path.a("key", "Map1"), key, breakdown)
            _visit(path.a("value", "Map1"), value, breakdown)
        case RootArray(len=length, values=values):
            _visit_array(path.a(f"[{length}]", "Array"), values, breakdown)
        case RootArray1(item=item):
            _visit(path.a("1", "Array1"), item, breakdown)
        case _:
            pass


def size_breakdown(data: bytes) -> str:
    """Describe how the bytes of a valid document are allocated, largest first.

    The text is meant for reading and debugging, not for parsing.
    """
    root = decode_root(data)
    breakdown = _SizeBreakdown(len(data))
    _visit(_Path(), root, breakdown)
    return str(breakdown)