"""Signal-level calibration and output-file helpers."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

__all__ = ["set_spl", "is_mat_file", "DEFAULT_RMS_LEVEL", "DEFAULT_SPL_REF"]

# Default presentation level (dB SPL) of input waveforms.
DEFAULT_RMS_LEVEL = 65.0
# Sample amplitude that corresponds to 0 dB SPL.
DEFAULT_SPL_REF = 1.1219e-6


def set_spl(
    x,
    rms_lev: float = DEFAULT_RMS_LEVEL,
    spl_ref: float = DEFAULT_SPL_REF,
) -> np.ndarray:
    """Return ``x`` scaled so its RMS level is ``rms_lev`` dB re ``spl_ref``.

    The input is left untouched; a new ``float32`` array is returned.
    """
    data = np.asarray(x, dtype=np.float32).ravel()
    if data.size == 0:
        raise ValueError("cannot set the level of an empty signal")
    if spl_ref <= 0:
        raise ValueError("level reference must be positive")
    wide = data.astype(np.float64)
    rms = math.sqrt(float(np.dot(wide, wide)) / data.size)
    if rms == 0:
        raise ValueError("cannot set the level of a silent signal")
    lev = 20 * math.log10(rms / spl_ref)
    scale = np.float32(10 ** ((rms_lev - lev) / 20))
    return (data * scale).astype(np.float32)


def is_mat_file(fn: Optional[str]) -> bool:
    """True if ``fn`` is longer than four characters and ends in ``mat``.

    The comparison ignores case.
    """
    if not fn or len(fn) <= 4:
        return False
    return fn[-3:].lower() == "mat"