"""Spectral (short-term FFT) compression with optional suppression."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .rfft import fft_cr, fft_rc

__all__ = ["ShaConfig", "ShaProcessor", "sha_window"]

_F32 = np.float32
_EPS = np.float32(1e-12)


def sha_window(nw: int, wt: int = 0, nsw: int = 2) -> np.ndarray:
    """Analysis window of length ``nw``: Hamming (``wt == 0``) or Blackman.

    The window is scaled so that its samples sum to ``nw / nsw``.
    """
    if nw <= 0:
        raise ValueError("window length must be positive")
    if nsw <= 0:
        raise ValueError("number of shifts per window must be positive")
    a, b = 0.16, 0.46
    p = math.pi * (2.0 * np.arange(nw) - nw) / nw
    if wt == 0:
        w = ((1 - b) + b * np.cos(p)).astype(_F32)
    else:
        w = ((1 - a + np.cos(p) + a * np.cos(2 * p)) / 2).astype(_F32)
    total = float(np.sum(w.astype(np.float64)))
    return (w * _F32(nw / total / nsw)).astype(_F32)


@dataclass
class ShaConfig:
    """Parameters of the spectral compressor.

    ``gmax`` is the maximum gain (dB), ``lmax`` the maximum output level (dB),
    ``lckp`` the compression kneepoint (dB), ``lekp`` the expansion kneepoint
    (dB), ``xr`` the expansion ratio and ``hbw`` the suppression half
    bandwidth in bins.  ``g1`` holds one linear gain per spectral bin
    (``nw + 1`` values) and ``supp`` the ``(nw + 1) ** 2`` suppressive-influence
    matrix, required when ``hbw > 0``.
    """

    cs: int
    nw: int
    sr: float
    gmax: float
    lmax: float
    lckp: float
    lekp: float
    ref: float
    wt: int = 0
    xr: int = 1
    hbw: int = 0
    g1: Optional[Sequence[float]] = None
    supp: Optional[Sequence[float]] = None


class ShaProcessor:
    """Chunked overlap-add spectral compressor."""

    def __init__(self, config: ShaConfig):
        cs, nw = config.cs, config.nw
        if cs <= 0:
            raise ValueError("chunk size must be positive")
        if cs % 2 or nw % 2:
            raise ValueError("chunk size and window size must be even")
        if nw < 2 or nw & (nw - 1):
            raise ValueError("window size must be a power of two")
        self.config = config
        self.nw = nw
        self.ns = nw // 2
        self.nf = nw + 1
        self.ncs = self.ns // cs
        self._ics = 0
        self.window = sha_window(nw, config.wt, 2)
        self._xx = np.zeros(nw, dtype=_F32)
        self._yy = np.zeros(2 * nw, dtype=_F32)

        if config.g1 is not None:
            g1 = np.asarray(config.g1, dtype=_F32).ravel()
            if g1.size != self.nf:
                raise ValueError(f"g1 must hold {self.nf} values")
            self._g1: Optional[np.ndarray] = g1
        else:
            self._g1 = None

        g0 = 10 ** (config.gmax / 20)
        a1 = 10 ** (-config.lckp / 20)
        a2 = 10 ** ((config.gmax - config.lmax) / 10)
        aa = (1e12 * a2) / (1 + a1 * 1e6 + a2 * 1e12)
        a1 *= aa
        a2 *= aa
        a3 = 0.0 if config.lckp <= 0 else 10 ** (config.xr * config.lekp / 10)
        gg = config.ref * (nw // 4) * math.sqrt(2)
        gg = 1 / (gg * gg)
        self.g0, self.a1, self.a2, self.a3, self.gg = (
            _F32(v) for v in (g0, a1, a2, a3, gg)
        )
        self.xr = config.xr
        self.hbw = config.hbw

        self._suppression: Optional[np.ndarray] = None
        if config.hbw > 0:
            if config.supp is None:
                raise ValueError("suppression bandwidth needs a suppression matrix")
            supp = np.asarray(config.supp, dtype=_F32).ravel()
            if supp.size != self.nf * self.nf:
                raise ValueError(f"suppression matrix must hold {self.nf ** 2} values")
            # Flat index k1 + k2 * nf -> row k2 (source bin), column k1 (target bin).
            matrix = supp.reshape(self.nf, self.nf)
            k = np.arange(self.nf)
            diff = k[:, None] - k[None, :]
            band = (diff >= -config.hbw) & (diff < config.hbw)
            self._suppression = np.where(band, matrix, _F32(0)).astype(_F32)

    def _compress(self, spectrum: np.ndarray) -> np.ndarray:
        xr = spectrum[0::2]
        xi = spectrum[1::2]
        if self._g1 is not None:
            xr = xr * self._g1
            xi = xi * self._g1
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            intensity = ((xr * xr + xi * xi) * self.gg).astype(_F32)
            if self.xr > 1:
                expansion = (_F32(1) / (intensity + _EPS)) ** self.xr
            else:
                expansion = np.zeros(self.nf, dtype=_F32)
            if self._suppression is not None:
                intensity = (intensity @ self._suppression).astype(_F32)
            amplitude = np.sqrt(intensity)
            gain = self.g0 / np.sqrt(
                _F32(1)
                + self.a1 * amplitude
                + self.a2 * intensity
                + self.a3 * expansion
            )
        out = np.empty_like(spectrum)
        out[0::2] = spectrum[0::2] * gain
        out[1::2] = spectrum[1::2] * gain
        return out.astype(_F32)

    def _frame(self) -> None:
        nw, ns = self.nw, self.ns
        padded = np.concatenate((self._xx * self.window, np.zeros(nw, dtype=_F32)))
        spectrum = fft_rc(padded)
        self._xx[:ns] = self._xx[ns:]
        response = fft_cr(self._compress(spectrum), 2 * nw)
        nn = 2 * nw - ns
        self._yy[:nn] = self._yy[ns : ns + nn].copy()
        self._yy[:nn] += response[:nn]
        self._yy[nn : nn + ns] = response[nn:]

    def process(self, x) -> np.ndarray:
        """Process one chunk of samples and return the output chunk."""
        data = np.asarray(x, dtype=_F32).ravel()
        cs = data.size
        ns = self.ns
        out = np.zeros(cs, dtype=_F32)
        if cs <= ns:
            if self.ncs == 0:
                raise ValueError("chunk size is incompatible with the prepared chunk size")
            nn = self._ics * cs
            self._xx[nn + ns : nn + ns + cs] = data
            out[:] = self._yy[nn : nn + cs]
            icp = (self._ics + 1) % self.ncs
            if icp == 0:
                self._frame()
            self._ics = icp
        else:
            for k in range(cs // ns):
                self._xx[ns:] = data[k * ns : (k + 1) * ns]
                out[k * ns : (k + 1) * ns] = self._yy[:ns]
                self._frame()
        return out