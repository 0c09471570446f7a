"""Example hearing-aid prescriptions and feedback-canceller settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

__all__ = [
    "DslPrescription",
    "WdrcParams",
    "AfcParams",
    "example_dsl",
    "example_wdrc",
    "afc_defaults",
]

# Crossover frequencies (Hz) of the example eight-channel filterbank.
EXAMPLE_CROSS_FREQ: Tuple[float, ...] = (
    317.1666, 502.9734, 797.6319, 1264.9, 2005.9, 3181.1, 5044.7,
)
# The same crossovers, rounded, as used by the IIR filterbank examples.
IIR_CROSS_FREQ: Tuple[float, ...] = (
    317.2, 503.0, 797.6, 1265.0, 2006.0, 3181.0, 5045.0,
)


@dataclass(frozen=True)
class DslPrescription:
    """Multichannel compression prescription.

    Times are in ms and levels in dB SPL.  ``cross_freq`` holds one
    crossover fewer than there are channels; ``tkgain``, ``cr``, ``tk`` and
    ``bolt`` hold one value per channel.
    """

    attack: float
    release: float
    maxdB: float
    ear: int
    nchannel: int
    cross_freq: Tuple[float, ...]
    tkgain: Tuple[float, ...]
    cr: Tuple[float, ...]
    tk: Tuple[float, ...]
    bolt: Tuple[float, ...]

    def __post_init__(self) -> None:
        if self.nchannel < 1:
            raise ValueError("a prescription needs at least one channel")
        if len(self.cross_freq) != self.nchannel - 1:
            raise ValueError(
                f"{self.nchannel} channels need {self.nchannel - 1} crossover frequencies"
            )
        for name in ("tkgain", "cr", "tk", "bolt"):
            if len(getattr(self, name)) != self.nchannel:
                raise ValueError(f"{name} must hold {self.nchannel} values")
        if any(b <= a for a, b in zip(self.cross_freq, self.cross_freq[1:])):
            raise ValueError("crossover frequencies must increase")


@dataclass(frozen=True)
class WdrcParams:
    """Wide-dynamic-range compression of the broadband signal.

    ``nz`` and ``td`` configure an IIR filterbank (poles/zeros and target
    delay in ms); ``nw`` and ``wt`` configure an FIR filterbank (window size
    and window type, 0 for Hamming, 1 for Blackman).
    """

    attack: float
    release: float
    fs: float
    maxdB: float
    tkgain: float
    tk: float
    cr: float
    bolt: float
    nz: int = 4
    td: float = 2.5
    nw: int = 256
    wt: int = 0


@dataclass
class AfcParams:
    """Adaptive feedback-cancellation settings."""

    afl: int = 42
    wfl: int = 9
    pfl: int = 0
    rho: float = 0.0
    eps: float = 0.0
    mu: float = 0.0
    alf: float = 0.0
    pup: int = 8
    hdel: int = 0
    sqm: int = 1
    fbg: float = 1.0
    nqm: int = 0
    extra: dict = field(default_factory=dict)


def example_dsl() -> DslPrescription:
    """The example eight-channel DSL prescription."""
    return DslPrescription(
        attack=5,
        release=50,
        maxdB=119,
        ear=0,
        nchannel=8,
        cross_freq=EXAMPLE_CROSS_FREQ,
        tkgain=(-13.5942, -16.5909, -3.7978, 6.6176, 11.3050, 23.7183, 35.8586, 37.3885),
        cr=(0.7, 0.9, 1.0, 1.1, 1.2, 1.4, 1.6, 1.7),
        tk=(32.2, 26.5, 26.7, 26.7, 29.8, 33.6, 34.3, 32.7),
        bolt=(78.7667, 88.2, 90.7, 92.8333, 98.2, 103.3, 101.9, 99.8),
    )


def example_wdrc(nz: int = 4, td: float = 2.5) -> WdrcParams:
    """The example broadband compressor with an IIR filterbank of ``nz`` poles."""
    if nz < 1:
        raise ValueError("number of poles and zeros must be at least 1")
    if td < 0:
        raise ValueError("target delay must not be negative")
    base = WdrcParams(
        attack=1, release=50, fs=24000, maxdB=119,
        tkgain=0, tk=105, cr=10, bolt=105,
    )
    return replace(base, nz=nz, td=td)


def _given(value: Optional[int]) -> bool:
    return value is not None and value >= 0


def afc_defaults(
    afl: Optional[int] = None,
    wfl: Optional[int] = None,
    pfl: Optional[int] = None,
    pup: Optional[int] = None,
) -> AfcParams:
    """Feedback-cancellation settings, tuned to the chosen filter lengths.

    Lengths left as ``None`` (or given negative) keep their defaults.  The
    adaptation constants depend on whether band-limit and whitening filters
    are in use.
    """
    params = AfcParams()
    if _given(afl):
        params.afl = int(afl)
    if _given(wfl):
        params.wfl = int(wfl)
    if _given(pfl):
        params.pfl = int(pfl)
    if params.pfl:
        params.rho = 0.007218985
        params.eps = 0.000919300
        params.mu = 0.004607254
        params.alf = 0.000010658
    elif params.wfl:
        params.rho = 0.008542769
        params.eps = 0.001128440
        params.mu = 0.004373509
    else:
        params.rho = 0.000002279
        params.eps = 0.001394894
        params.mu = 0.000417949
    if _given(pup):
        params.pup = int(pup)
    return params