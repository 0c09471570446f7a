import numpy as np
import pytest

from hearpro.rfft import fft_cr, fft_rc


def test_output_length_and_real_edges():
    x = np.random.default_rng(1).standard_normal(64)
    spec = fft_rc(x)
    assert spec.shape == (66,)
    assert spec[1] == 0.0
    assert spec[65] == 0.0


def test_impulse_gives_flat_spectrum():
    x = np.zeros(32)
    x[0] = 1.0
    spec = fft_rc(x)
    assert np.allclose(spec[0::2], 1.0, atol=1e-6)
    assert np.allclose(spec[1::2], 0.0, atol=1e-6)


def test_constant_signal_only_dc():
    x = np.full(16, 0.5)
    spec = fft_rc(x)
    assert spec[0] == pytest.approx(16 * 0.5, rel=1e-6)
    assert np.allclose(spec[2:], 0.0, atol=1e-5)


def test_cosine_and_sine_bins():
    n, k = 64, 5
    t = np.arange(n)
    c = fft_rc(np.cos(2 * np.pi * k * t / n))
    s = fft_rc(np.sin(2 * np.pi * k * t / n))
    assert c[2 * k] == pytest.approx(n / 2, rel=1e-4)
    assert s[2 * k + 1] == pytest.approx(-n / 2, rel=1e-4)


def test_round_trip():
    x = np.random.default_rng(2).standard_normal(128).astype(np.float32)
    y = fft_cr(fft_rc(x), 128)
    assert np.allclose(x, y, atol=1e-5)


def test_parseval():
    x = np.random.default_rng(3).standard_normal(256)
    spec = fft_rc(x).astype(np.float64)
    mag2 = spec[0::2] ** 2 + spec[1::2] ** 2
    energy = (mag2[0] + mag2[-1] + 2 * mag2[1:-1].sum()) / 256
    assert energy == pytest.approx(float(np.sum(x * x)), rel=1e-4)


def test_inverse_ignores_edge_imaginary_parts():
    x = np.random.default_rng(4).standard_normal(32)
    spec = fft_rc(x)
    spec[1] = 7.0
    spec[33] = -3.0
    assert np.allclose(fft_cr(spec, 32), x, atol=1e-5)


@pytest.mark.parametrize("n", [1, 12, 100])
def test_non_power_of_two_rejected(n):
    with pytest.raises(ValueError):
        fft_rc(np.zeros(n))


def test_short_spectrum_rejected():
    with pytest.raises(ValueError):
        fft_cr(np.zeros(10), 16)