"""Byte-window to number derivation.

Seven bytes give 5 + 6 * 8 = 53 bits, the width of a double mantissa.
The first byte of the window is masked to its low five bits and is the
least significant; the last byte is the most significant.  Dividing step
by step keeps every intermediate exactly representable, so the result is
in ``[0, 1)`` and never rounds up to ``1.0``.
"""

from __future__ import annotations

from collections.abc import Sequence

WINDOW_SIZE = 7


def float_from_window(window: Sequence[int]) -> float:
    """Derive a float in ``[0, 1)`` from a 7-byte window."""
    if len(window) != WINDOW_SIZE:
        raise ValueError(f"window must be {WINDOW_SIZE} bytes, got {len(window)}")
    value = (window[0] % 32) / 32
    for b in window[1:]:
        value = (value + b) / 256
    return value


def project_int(value: float, low: int, high: int) -> int:
    """Map a float in ``[0, 1)`` onto the integers ``[low, high]``.

    Plain ``floor(value * span)``; no rejection sampling, so spans that do
    not divide 2**53 carry a bias of at most ``span / 2**53``.
    """
    return low + int(value * (high - low + 1))
