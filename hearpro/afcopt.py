"""Options and reporting for tuning the adaptive feedback canceller."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from .levels import is_mat_file

__all__ = [
    "OptOptions",
    "MisalignmentSummary",
    "parse_opt_args",
    "max_error_db",
    "misalignment_summary",
    "format_parameters",
]

_VERSION = "hearpro 0.1.0"

_USAGE = """\
usage: opt_afc [-options] [input_file] [output_file]
options
-h    print help
-m    output MAT file
-nN   AFC filter length = n
-pN   band-limit filter length = n
-rN   number of input file repetitions = N
-tN   AFC optimize time = N
-uN   band-limit filter update period = N
-v    print version
-wN   whiten filter length = n"""

_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"\s*[+-]?\d+")

_PARAMETERS = (
    ("rho", "forgetting factor"),
    ("eps", "power threshold"),
    ("mu ", "step size"),
    ("alf", "band-limit update"),
)

# Floor of the maximum misalignment, so the dB value stays finite.
_MIN_QM = 1e-12


def _int_prefix(text: str) -> int:
    match = _INTEGER.match(text)
    return int(match.group()) if match else 0


def _float_prefix(text: str) -> float:
    match = _NUMBER.match(text)
    return float(match.group()) if match else 0.0


@dataclass
class OptOptions:
    """Command-line settings of the feedback-canceller tuner.

    Filter lengths and the update period are ``-1`` when not given.
    ``tqm`` is the settling time (s) before errors count.
    """

    mat: bool = True
    nrep: int = 1
    tqm: float = 2.0
    afl: int = -1
    wfl: int = -1
    pfl: int = -1
    pup: int = -1
    ifn: str = "test/carrots.wav"
    ofn: Optional[str] = None


def parse_opt_args(argv: Optional[Sequence[str]] = None) -> OptOptions:
    """Parse arguments (without the program name) into :class:`OptOptions`.

    ``-h`` prints usage and ``-v`` the version; both exit with status 0.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    opts = OptOptions()
    while args and args[0].startswith("-"):
        arg = args.pop(0)
        flag, value = arg[1:2], arg[2:]
        if flag in ("b", "p"):
            opts.pfl = _int_prefix(value)
        elif flag == "h":
            print(_USAGE)
            raise SystemExit(0)
        elif flag == "m":
            opts.mat = True
        elif flag == "n":
            opts.afl = _int_prefix(value)
        elif flag == "r":
            opts.nrep = _int_prefix(value)
        elif flag == "t":
            opts.tqm = _float_prefix(value)
        elif flag == "u":
            opts.pup = int(_float_prefix(value))
        elif flag == "v":
            print(_VERSION)
            raise SystemExit(0)
        elif flag == "w":
            opts.wfl = _int_prefix(value)
    if args:
        opts.ifn = args[0]
    if len(args) > 1:
        opts.ofn = args[1]
        opts.mat = is_mat_file(opts.ofn)
    return opts


def _db(value: float) -> float:
    return 10 * math.log10(value) if value > 0 else -math.inf


def _check_count(qm: Sequence[float], iqm: int) -> None:
    if iqm > len(qm):
        raise ValueError(f"count {iqm} exceeds {len(qm)} recorded values")


def max_error_db(qm: Sequence[float], iqm: int, jqm: int) -> float:
    """Largest misalignment (dB) recorded from sample ``jqm`` up to ``iqm``.

    This is the quantity the tuner minimises.
    """
    _check_count(qm, iqm)
    largest = max((float(v) for v in qm[max(jqm, 0) : max(iqm, 0)]), default=_MIN_QM)
    return 10 * math.log10(max(largest, _MIN_QM))


@dataclass(frozen=True)
class MisalignmentSummary:
    """Where the misalignment error bottomed out and peaked afterwards."""

    final_error_db: Optional[float]
    max_error_db: float
    jqm: int
    min_index: int
    max_index: int
    iqm: int
    nqm: int


def misalignment_summary(
    qm: Sequence[float], iqm: int, jqm: int
) -> Optional[MisalignmentSummary]:
    """Summarise the first ``iqm`` misalignment values, or ``None`` if empty.

    The minimum is searched over all values; the peak is searched from the
    minimum onwards.
    """
    _check_count(qm, iqm)
    if iqm <= 0:
        return None
    values = [float(v) for v in qm[:iqm]]
    last = iqm - 1
    final = _db(values[last]) if values[last] > 0 else None
    kqm = last
    for i in reversed(range(iqm)):
        if values[kqm] > values[i]:
            kqm = i
    lqm = last
    for i in range(kqm, iqm):
        if values[lqm] < values[i]:
            lqm = i
    return MisalignmentSummary(
        final_error_db=final,
        max_error_db=_db(values[lqm]),
        jqm=jqm,
        min_index=kqm,
        max_index=lqm,
        iqm=iqm,
        nqm=len(qm),
    )


def format_parameters(par: Sequence[float]) -> str:
    """Render tuned parameters as assignment lines for a configuration."""
    if len(par) > len(_PARAMETERS):
        raise ValueError(f"at most {len(_PARAMETERS)} parameters are tuned")
    lines = ["    // AFC parameters"]
    for (name, note), value in zip(_PARAMETERS, par):
        lines.append(f"        afc.{name}  = {float(value):11.9f}; // {note}")
    return "\n".join(lines)