import pytest

from treebuf.errors import InvalidFormat
from treebuf.stats import size_breakdown
from treebuf.stream import EncoderStream
from treebuf.varint import encode_prefix_varint
from treebuf.wire import ArrayTypeId, RootTypeId, encode_ident


def _array_column(type_id, payload):
    def write(stream):
        stream.encode_with_len(lambda s: s.bytes.extend(payload))
        return type_id

    return write


def _root_array(length, column):
    def write(stream):
        encode_prefix_varint(length, stream.bytes)
        stream.encode_with_id(column)
        return RootTypeId.ARRAY_N

    return write


def _object_document(fields):
    def root(stream):
        for name, writer in fields.items():
            encode_ident(name, stream)
            stream.encode_with_id(writer)
        return RootTypeId(RootTypeId.OBJ0 + len(fields))

    stream = EncoderStream()
    stream.encode_with_id(root)
    return stream.finish()


def test_empty_document_has_nothing_accounted():
    assert size_breakdown(b"") == "Largest by path:\n\nLargest by type:\n\nOther: 0\nTotal: 0\n"


def test_single_integer_column():
    payload = b"\x03\x05\x07"
    data = _object_document({"x": _root_array(3, _array_column(ArrayTypeId.INT_PREFIX_VAR, payload))})
    report = size_breakdown(data)
    assert f"\t{len(payload)}\n\t   x.[3]\n\t   Object.Array.Prefix Varint\n" in report
    assert f"\t 1x {len(payload)} @ Prefix Varint\n" in report
    assert f"Other: {len(data) - len(payload)}\n" in report
    assert report.endswith(f"Total: {len(data)}\n")


def test_paths_sorted_largest_first_and_types_aggregated():
    small = b"\x01\x01"
    large = b"\x01\x01\x01\x01\x01"
    data = _object_document(
        {
            "a": _root_array(2, _array_column(ArrayTypeId.INT_PREFIX_VAR, small)),
            "b": _root_array(5, _array_column(ArrayTypeId.INT_PREFIX_VAR, large)),
        }
    )
    report = size_breakdown(data)
    assert report.index("b.[5]") < report.index("a.[2]")
    assert f"\t 2x {len(small) + len(large)} @ Prefix Varint\n" in report


def test_labels_for_bool_and_string_columns():
    data = _object_document(
        {
            "flags": _root_array(8, _array_column(ArrayTypeId.PACKED_BOOL, b"\xaa")),
            "names": _root_array(2, _array_column(ArrayTypeId.UTF8, b"hello")),
        }
    )
    report = size_breakdown(data)
    assert "Object.Array.Packed Boolean" in report
    assert "Object.Array.UTF-8" in report
    assert report.index("names.[2]") < report.index("flags.[8]")


def test_root_scalars_count_as_other():
    data = bytes([RootTypeId.STR1, ord("a")])
    report = size_breakdown(data)
    assert report.endswith(f"Other: {len(data)}\nTotal: {len(data)}\n")


def test_invalid_document_raises():
    with pytest.raises(InvalidFormat):
        size_breakdown(b"\xff")