"""Error types raised by the generator."""

from __future__ import annotations


class RandomLibError(Exception):
    """Base class for all randomlib errors."""


class RangeTooSmallError(RandomLibError, ValueError):
    """More unique integers were requested than ``[low, high]`` holds."""

    def __init__(self, low: int, high: int, count: int) -> None:
        self.low = low
        self.high = high
        self.count = count
        super().__init__(
            f"asked for {count} unique ints but [{low}, {high}] "
            f"only holds {max(high - low + 1, 0)}"
        )


class EntropySourceError(RandomLibError):
    """The underlying byte source could not provide entropy."""
