"""Command-line options of the filterbank + compressor + feedback simulation."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from .levels import is_mat_file

__all__ = ["NadOptions", "parse_args"]

_VERSION = "hearpro 0.1.0"

_USAGE = """\
usage: tst_nad [-options] [input_file] [output_file]
options
-a    disable feedback cancelation
-d    disable simulated feedback
-h    print help
-m    output MAT file
-nN   AFC filter length = n
-pN   band-limit filter length = n
-P    play output
-rN   number of input file repetitions = N
-uN   band-limit filter update period = N
-v    print version
-wN   whiten filter length = n"""

_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _leading_int(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _leading_float(text: str) -> float:
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class NadOptions:
    """Settings chosen on the command line.

    Filter lengths and the update period are ``-1`` when not given, which
    leaves the feedback-canceller defaults in place.
    """

    afc: bool = True
    simfb: bool = True
    mat: bool = True
    play: bool = False
    nrep: int = 1
    afl: int = -1
    wfl: int = -1
    pfl: int = -1
    pup: int = -1
    ifn: Optional[str] = None
    ofn: Optional[str] = None


def parse_args(argv: Optional[Sequence[str]] = None) -> NadOptions:
    """Parse arguments (without the program name) into :class:`NadOptions`.

    ``-h`` prints usage and ``-v`` the version; both exit with status 0.
    Numeric values follow the option letter directly, as in ``-n32``.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    opts = NadOptions()
    while args and args[0].startswith("-"):
        arg = args.pop(0)
        flag, value = arg[1:2], arg[2:]
        if flag == "a":
            opts.afc = False
        elif flag == "d":
            opts.simfb = False
        elif flag == "h":
            print(_USAGE)
            raise SystemExit(0)
        elif flag == "m":
            opts.mat = True
        elif flag == "n":
            opts.afl = _leading_int(value)
        elif flag == "p":
            opts.pfl = _leading_int(value)
        elif flag == "P":
            opts.play = True
        elif flag == "r":
            opts.nrep = _leading_int(value)
        elif flag == "u":
            opts.pup = int(_leading_float(value))
        elif flag == "v":
            print(_VERSION)
            raise SystemExit(0)
        elif flag == "w":
            opts.wfl = _leading_int(value)
    if args:
        opts.ifn = args[0]
    if len(args) > 1:
        opts.ofn = args[1]
        opts.mat = is_mat_file(opts.ofn)
    return opts