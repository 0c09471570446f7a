"""Segmented playback feeding for continuous (device) output.

During playback the output device works through a ring of ``mseg``
segments of ``cs`` samples.  While segment ``oseg`` plays, segment
``oseg + mseg`` is prepared: the next ``cs`` samples of the looped input
are taken and processed in place.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

__all__ = ["SegmentFeeder", "dac_chunk_size", "DEFAULT_IO_WAIT"]

# Polling interval (ms) between checks of the device segment.
DEFAULT_IO_WAIT = 40


def dac_chunk_size(rate: float, io_wait: float = DEFAULT_IO_WAIT) -> int:
    """Segment size for device output: four polling intervals of samples."""
    if rate <= 0:
        raise ValueError("sampling rate must be positive")
    if io_wait <= 0:
        raise ValueError("polling interval must be positive")
    # Round half away from zero.
    return int(math.floor(rate * io_wait * 4 / 1000 + 0.5))


class SegmentFeeder:
    """Feeds a looped input waveform, segment by segment, to a processor."""

    def __init__(self, iwav, cs: int, nrep: int = 1, mseg: int = 2):
        data = np.asarray(iwav, dtype=np.float32).ravel()
        if data.size == 0:
            raise ValueError("input waveform must not be empty")
        if cs <= 0:
            raise ValueError("segment size must be positive")
        if mseg < 1:
            raise ValueError("number of segments must be at least 1")
        self.iwav = data
        self.cs = int(cs)
        self.nrep = max(int(nrep), 1)
        self.mseg = int(mseg)
        self.pseg = self.mseg
        self.buffer = np.zeros(self.cs * self.mseg, dtype=np.float32)

    @property
    def total(self) -> int:
        """Number of samples in the looped input."""
        return self.nrep * self.iwav.size

    @property
    def nseg(self) -> int:
        """Number of whole segments in the looped input."""
        return self.total // self.cs

    def active(self, oseg: int) -> bool:
        """True while the device segment ``oseg`` is still within the input."""
        return oseg < self.nseg

    def _next_input(self) -> np.ndarray:
        cs = self.cs
        od = self.pseg * cs
        remaining = min(max(self.total - od, 0), cs)
        chunk = np.zeros(cs, dtype=np.float32)
        if remaining:
            nwav = self.iwav.size
            idx = (od + np.arange(remaining)) % nwav
            chunk[:remaining] = self.iwav[idx]
        return chunk

    def fill(
        self,
        oseg: int,
        process: Callable[[np.ndarray], Optional[np.ndarray]],
    ) -> Optional[np.ndarray]:
        """Prepare the segment that follows device segment ``oseg``.

        When the device has reached the segment this feeder waits for, the
        next input segment is passed to ``process``; its result (or the
        input itself, if ``process`` returns ``None``) is stored in the ring
        buffer and returned.  Otherwise nothing happens and ``None`` is
        returned.
        """
        if oseg + self.mseg != self.pseg:
            return None
        chunk = self._next_input()
        result = process(chunk)
        out = chunk if result is None else np.asarray(result, dtype=np.float32).ravel()
        if out.size != self.cs:
            raise ValueError(f"processor must return {self.cs} samples")
        ow = (self.pseg % self.mseg) * self.cs
        self.buffer[ow : ow + self.cs] = out
        self.pseg += 1
        return out.copy()