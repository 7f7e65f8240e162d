import pytest

from treebuf.compress import NotCompressible, SAMPLE_SIZE, compress, fast_size_for, within_rle
from treebuf.options import EncodeOptions
from treebuf.stream import EncoderStream
from treebuf.varint import encode_prefix_varint, size_for_varint
from treebuf.wire import ArrayTypeId


class _Varint:
    def fast_size_for(self, data, options):
        return sum(size_for_varint(v) for v in data)

    def compress(self, data, stream):
        def write(s):
            for value in data:
                encode_prefix_varint(value, s.bytes)

        stream.encode_with_len(write)
        return ArrayTypeId.INT_PREFIX_VAR


class _Fixed8:
    def fast_size_for(self, data, options):
        return 8 * len(data)

    def compress(self, data, stream):
        for value in data:
            stream.bytes.extend(value.to_bytes(8, "little"))
        return ArrayTypeId.F64


class _WritesThenFails:
    def fast_size_for(self, data, options):
        return 0

    def compress(self, data, stream):
        stream.bytes.extend(b"junk")
        stream.lens.append(4)
        raise NotCompressible()


class _Refuses:
    def fast_size_for(self, data, options):
        raise NotCompressible()

    def compress(self, data, stream):
        stream.bytes.extend(b"XX")
        return ArrayTypeId.UTF8


class _RecordsSample:
    def __init__(self):
        self.seen = None

    def fast_size_for(self, data, options):
        self.seen = len(data)
        return 0

    def compress(self, data, stream):
        return ArrayTypeId.U8


def _varint_bytes(values):
    out = bytearray()
    for value in values:
        encode_prefix_varint(value, out)
    return bytes(out)


def test_single_compressor_is_used_directly():
    stream = EncoderStream()
    result = compress([1, 2, 3], stream, [_Varint()])
    assert result == ArrayTypeId.INT_PREFIX_VAR
    assert bytes(stream.bytes) == _varint_bytes([1, 2, 3])
    assert stream.lens == [len(_varint_bytes([1, 2, 3]))]


def test_smallest_estimate_wins():
    stream = EncoderStream()
    result = compress([1, 2, 3], stream, [_Fixed8(), _Varint()])
    assert result == ArrayTypeId.INT_PREFIX_VAR
    assert bytes(stream.bytes) == _varint_bytes([1, 2, 3])


def test_failed_compressor_output_is_discarded():
    stream = EncoderStream()
    stream.bytes.extend(b"pre")
    stream.lens.append(3)
    result = compress([5, 6], stream, [_WritesThenFails(), _Varint()])
    assert result == ArrayTypeId.INT_PREFIX_VAR
    assert bytes(stream.bytes) == b"pre" + _varint_bytes([5, 6])
    assert stream.lens == [3, len(_varint_bytes([5, 6]))]


def test_refusing_compressor_is_never_tried():
    stream = EncoderStream()
    result = compress([1], stream, [_Refuses(), _Fixed8()])
    assert result == ArrayTypeId.F64
    assert b"XX" not in bytes(stream.bytes)


def test_ties_keep_the_given_order():
    stream = EncoderStream()
    result = compress([], stream, [_Fixed8(), _Varint()])
    assert result == ArrayTypeId.F64


def test_ranking_uses_a_sample():
    recorder = _RecordsSample()
    stream = EncoderStream()
    compress(list(range(1000)), stream, [recorder, _Fixed8()])
    assert recorder.seen == SAMPLE_SIZE


def test_no_working_compressor_raises():
    with pytest.raises(NotCompressible):
        compress([1, 2], EncoderStream(), [_Refuses(), _WritesThenFails()])


def test_no_compressors_raises():
    with pytest.raises(NotCompressible):
        compress([1], EncoderStream(), [])


def test_fast_size_for_takes_minimum():
    data = [1, 2, 300]
    options = EncodeOptions()
    expected = _Varint().fast_size_for(data, options)
    assert fast_size_for(data, [_Fixed8(), _Refuses(), _Varint()], options) == expected


def test_fast_size_for_with_nothing_usable_raises():
    with pytest.raises(NotCompressible):
        fast_size_for([1], [_Refuses()], EncodeOptions())


def test_within_rle_does_not_nest():
    with within_rle():
        with pytest.raises(NotCompressible):
            with within_rle():
                pass


def test_within_rle_can_be_entered_again_after_exit():
    with within_rle():
        pass
    with within_rle():
        with pytest.raises(NotCompressible):
            with within_rle():
                pass
    with within_rle():
        with pytest.raises(NotCompressible):
            with within_rle():
                pass


def test_within_rle_resets_after_error():
    with pytest.raises(NotCompressible):
        with within_rle():
            raise NotCompressible()
    with within_rle():
        with pytest.raises(NotCompressible):
            with within_rle():
                pass