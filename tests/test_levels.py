import math

import numpy as np
import pytest

from hearpro.levels import (
    DEFAULT_RMS_LEVEL,
    DEFAULT_SPL_REF,
    is_mat_file,
    set_spl,
)


def _level(x, ref):
    x = np.asarray(x, dtype=np.float64)
    return 20 * math.log10(math.sqrt(np.mean(x * x)) / ref)


def test_set_spl_reaches_default_level():
    x = np.sin(np.arange(1000) * 0.1).astype(np.float32)
    y = set_spl(x)
    assert _level(y, DEFAULT_SPL_REF) == pytest.approx(DEFAULT_RMS_LEVEL, abs=1e-3)


def test_set_spl_custom_level_and_reference():
    x = np.linspace(-1, 1, 501, dtype=np.float32)
    y = set_spl(x, rms_lev=80.0, spl_ref=2e-5)
    assert _level(y, 2e-5) == pytest.approx(80.0, abs=1e-3)


def test_set_spl_preserves_shape_and_leaves_input():
    x = np.array([0.5, -0.25, 0.125, 0.0], dtype=np.float32)
    original = x.copy()
    y = set_spl(x)
    assert y.dtype == np.float32
    assert y.shape == x.shape
    np.testing.assert_array_equal(x, original)
    ratio = y[:3] / x[:3]
    np.testing.assert_allclose(ratio, ratio[0], rtol=1e-6)


def test_set_spl_silent_signal_raises():
    with pytest.raises(ValueError):
        set_spl(np.zeros(16))


def test_set_spl_empty_signal_raises():
    with pytest.raises(ValueError):
        set_spl([])


def test_set_spl_bad_reference_raises():
    with pytest.raises(ValueError):
        set_spl([1.0, 2.0], spl_ref=0.0)


@pytest.mark.parametrize(
    "fn, expected",
    [
        ("test/tst_nad.mat", True),
        ("OUT.MAT", True),
        ("out.Mat", True),
        ("test/tst_nad.wav", False),
        (".mat", False),
        ("mat", False),
        ("", False),
        (None, False),
    ],
)
def test_is_mat_file(fn, expected):
    assert is_mat_file(fn) is expected