"""Filterbank band layouts, flat compression prescriptions and probe signals."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

__all__ = [
    "GammatoneBands",
    "CompressionChannels",
    "fir_cross_frequencies",
    "gammatone_bands",
    "flat_compression",
    "test_signal",
]

_FMID = 1000.0


def _half_octave_count(sr: float, per_octave: float) -> int:
    """Number of bands above 1 kHz that fit below the Nyquist frequency."""
    if sr <= 0:
        raise ValueError("sampling rate must be positive")
    nh = math.floor(math.log2(float(np.float32(sr / 2000))) * per_octave)
    return max(nh, 0)


def fir_cross_frequencies(sr: float) -> Tuple[float, ...]:
    """Crossover frequencies (Hz) for the FIR filterbank at sampling rate ``sr``.

    Five linearly spaced crossovers start at 250 Hz below 1 kHz; above it
    there are three per octave up to the Nyquist frequency.  The filterbank
    has one channel more than there are crossovers.
    """
    nm, fmin, bpo = 5, 250.0, 3.0
    nh = _half_octave_count(sr, bpo)
    low = (fmin + i * (_FMID - fmin) / (nm - 0.5) for i in range(nm))
    high = (_FMID * 2.0 ** ((i + 0.5) / bpo) for i in range(nh))
    return tuple(low) + tuple(high)


@dataclass(frozen=True)
class GammatoneBands:
    """Center frequencies and bandwidths (Hz) of a gammatone filterbank.

    ``target_delay`` is the suggested filterbank group delay in ms.
    """

    fc: Tuple[float, ...]
    bw: Tuple[float, ...]
    target_delay: float

    @property
    def nc(self) -> int:
        """Number of channels."""
        return len(self.fc)


def gammatone_bands(sr: float, nm: int = 5, cpo: int = 3) -> GammatoneBands:
    """Lay out gammatone bands: ``nm`` bands up to 1 kHz, ``cpo`` per octave above."""
    if nm < 1:
        raise ValueError("number of bands below 1 kHz must be at least 1")
    if cpo < 1:
        raise ValueError("bands per octave must be at least 1")
    lfbw = float(np.float32(_FMID / nm))
    nh = _half_octave_count(sr, cpo)
    nc = nh + nm
    fc = [lfbw * (i + 1) for i in range(nm - 1)]
    bw = [lfbw] * (nm - 1)
    fc.append(_FMID)
    bw.append(_FMID * (2.0 ** (0.5 / cpo) - (nm - 0.5) / nm))
    for i in range(nm, nc):
        fc.append(_FMID * 2.0 ** ((i - nm + 1.0) / cpo))
        bw.append(
            _FMID * (2.0 ** ((i - nm + 1.5) / cpo) - 2.0 ** ((i - nm + 0.5) / cpo))
        )
    return GammatoneBands(tuple(fc), tuple(bw), 400 / lfbw)


@dataclass(frozen=True)
class CompressionChannels:
    """Per-channel compression levels (dB) and gains (dB).

    ``cm`` is the compression mode.  ``bw`` holds the channel bandwidths (Hz)
    when they were derived from crossover frequencies, otherwise ``None``.
    """

    cm: int
    lcs: Tuple[float, ...]
    lcm: Tuple[float, ...]
    lce: Tuple[float, ...]
    lmx: Tuple[float, ...]
    gcs: Tuple[float, ...]
    gcm: Tuple[float, ...]
    gce: Tuple[float, ...]
    gmx: Tuple[float, ...]
    bw: Optional[Tuple[float, ...]] = None

    @property
    def nc(self) -> int:
        """Number of channels."""
        return len(self.lcs)


def flat_compression(
    nc: int,
    gain: float,
    cross_freq: Optional[Sequence[float]] = None,
    sr: Optional[float] = None,
) -> CompressionChannels:
    """Flat compression prescription of ``gain`` dB across ``nc`` channels.

    With ``cross_freq`` (and ``sr``) the channel bandwidths are taken from
    neighbouring crossovers, the last channel reaching the Nyquist frequency.
    """
    if nc < 1:
        raise ValueError("number of channels must be at least 1")
    g = float(np.float32(gain))
    bw: Optional[Tuple[float, ...]] = None
    if cross_freq is not None:
        if sr is None:
            raise ValueError("sampling rate is needed to derive bandwidths")
        cf = [float(f) for f in cross_freq]
        if len(cf) < nc - 1:
            raise ValueError(f"{nc} channels need {nc - 1} crossover frequencies")
        edges = [0.0] + cf[: nc - 1] + [sr / 2]
        bw = tuple(hi - lo for lo, hi in zip(edges, edges[1:]))
    return CompressionChannels(
        cm=1,
        lcs=(0.0,) * nc,
        lcm=(50.0,) * nc,
        lce=(100.0,) * nc,
        lmx=(120.0,) * nc,
        gcs=(g,) * nc,
        gcm=(g / 2,) * nc,
        gce=(0.0,) * nc,
        gmx=(90.0,) * nc,
        bw=bw,
    )


def test_signal(rate: float, tone: bool = False) -> np.ndarray:
    """One second of probe signal: a unit impulse, or a 1 kHz sine if ``tone``."""
    if rate <= 0:
        raise ValueError("sampling rate must be positive")
    n = math.floor(rate + 0.5)
    if tone:
        p = np.float32(2 * math.pi * 1000.0 / rate)
        phase = np.arange(n, dtype=np.float32) * p
        return np.sin(phase.astype(np.float64)).astype(np.float32)
    x = np.zeros(n, dtype=np.float32)
    x[0] = 1.0
    return x


test_signal.__test__ = False  # type: ignore[attr-defined]