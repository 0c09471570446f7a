"""Hearing-aid signal processing: real FFTs, spectral compression, filterbank layouts, prescriptions and feedback-cancellation helpers."""

__version__ = "0.1.0"

__all__ = [
    "afcopt",
    "bands",
    "levels",
    "options",
    "prescription",
    "rfft",
    "sha",
    "stream",
]