import threading

import pytest

from treebuf.options import (
    DecodeOptions,
    DisableParallel,
    EnableParallel,
    EncodeOptions,
    LosslessFloat,
    LossyFloatTolerance,
    decode_options,
    encode_options,
    parallel,
)


def test_defaults():
    assert encode_options() == EncodeOptions()
    assert encode_options().lossy_float_tolerance is None
    assert decode_options().parallel is True


def test_disable_parallel():
    assert decode_options(DisableParallel()).parallel is False


def test_later_override_wins():
    assert decode_options(DisableParallel(), EnableParallel()).parallel is True
    assert decode_options(EnableParallel(), DisableParallel()).parallel is False


def test_lossy_tolerance():
    assert encode_options(LossyFloatTolerance(-5)).lossy_float_tolerance == -5


def test_lossless_after_lossy():
    options = encode_options(LossyFloatTolerance(-5), LosslessFloat())
    assert options.lossy_float_tolerance is None


def test_apply_leaves_original_unchanged():
    original = DecodeOptions()
    changed = DisableParallel().apply(original)
    assert original.parallel is True
    assert changed.parallel is False


def test_override_of_wrong_kind():
    with pytest.raises(TypeError):
        encode_options(DisableParallel())
    with pytest.raises(TypeError):
        decode_options(LosslessFloat())


@pytest.mark.parametrize("enabled", [True, False])
def test_parallel_returns_results_in_order(enabled):
    options = DecodeOptions(parallel=enabled)
    assert parallel(lambda: "a", lambda: 2, options) == ("a", 2)


def test_parallel_disabled_runs_on_calling_thread():
    caller = threading.get_ident()
    result = parallel(threading.get_ident, threading.get_ident, decode_options(DisableParallel()))
    assert result == (caller, caller)


@pytest.mark.parametrize("enabled", [True, False])
def test_parallel_propagates_errors(enabled):
    def fail():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        parallel(fail, lambda: 1, DecodeOptions(parallel=enabled))
    with pytest.raises(KeyError):
        parallel(lambda: 1, fail, DecodeOptions(parallel=enabled))