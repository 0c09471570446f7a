"""Real-to-complex and complex-to-real FFTs for power-of-two lengths.

Spectra are stored as interleaved ``float32`` values
``[re0, im0, re1, im1, ..., re(n/2), im(n/2)]``, i.e. ``n + 2`` values for
a real signal of length ``n``.  The forward transform is unscaled and the
inverse is scaled by ``1/n``, so a round trip reproduces the input.
"""

from __future__ import annotations

import numpy as np

__all__ = ["fft_rc", "fft_cr"]


def _check_size(n: int) -> None:
    if n < 2 or n & (n - 1):
        raise ValueError(f"FFT length must be a power of two >= 2, got {n}")


def fft_rc(x) -> np.ndarray:
    """Forward FFT of a real signal; returns ``len(x) + 2`` interleaved values."""
    data = np.asarray(x, dtype=np.float32)
    if data.ndim != 1:
        raise ValueError("fft_rc expects a one-dimensional signal")
    n = data.size
    _check_size(n)
    spectrum = np.fft.rfft(data.astype(np.float64))
    out = np.empty(n + 2, dtype=np.float32)
    out[0::2] = spectrum.real
    out[1::2] = spectrum.imag
    # DC and Nyquist bins of a real signal are purely real.
    out[1] = 0.0
    out[n + 1] = 0.0
    return out


def fft_cr(spectrum, n: int) -> np.ndarray:
    """Inverse FFT of an interleaved half spectrum to ``n`` real samples."""
    _check_size(n)
    data = np.asarray(spectrum, dtype=np.float32)
    if data.ndim != 1 or data.size < n + 2:
        raise ValueError(f"spectrum must hold at least {n + 2} values")
    half = data[0 : n + 2 : 2].astype(np.float64) + 1j * data[1 : n + 2 : 2].astype(np.float64)
    half[0] = half[0].real
    half[-1] = half[-1].real
    return np.fft.irfft(half, n).astype(np.float32)