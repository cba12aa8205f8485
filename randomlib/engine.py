"""Generation loop over a shared entropy buffer."""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from randomlib.buffer import EntropyBuffer
from randomlib.derive import float_from_window, project_int
from randomlib.errors import EntropySourceError, RangeTooSmallError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """One call's worth of generation parameters.

    ``low``/``high`` are inclusive and only used when ``as_integer`` is set.
    ``single`` collapses the one-element result to a scalar.
    """

    count: int = 10
    low: int = 0
    high: int = 10
    unique: bool = False
    as_integer: bool = False
    single: bool = False

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"count must be positive, got {self.count}")
        if self.single and self.count != 1:
            raise ValueError("single requests must have count == 1")
        if self.as_integer and self.high < self.low:
            raise ValueError(f"high ({self.high}) is below low ({self.low})")

    @property
    def span(self) -> int:
        return self.high - self.low + 1

    def check(self) -> None:
        """Raise :class:`RangeTooSmallError` if the request can never finish."""
        if self.unique and self.as_integer and self.span < self.count:
            raise RangeTooSmallError(self.low, self.high, self.count)


class GenerationEngine:
    """Turns buffer windows into values for any number of concurrent requests.

    The first fill is started in the background on construction; requests
    that arrive before it lands wait inside the buffer and resume once it
    completes (or fail with the fill's error).
    """

    def __init__(self, buffer: EntropyBuffer, prefill: bool = True) -> None:
        self.buffer = buffer
        if prefill:
            self.start_fill()

    def start_fill(self) -> threading.Thread | None:
        """Start a background fill unless one is already in flight."""
        if not self.buffer.begin_fill():
            return None
        t = threading.Thread(target=self._background_fill, name="randomlib-fill", daemon=True)
        t.start()
        return t

    def _background_fill(self) -> None:
        try:
            self.buffer.fill()
        except EntropySourceError as exc:
            # every waiter has already been handed this error
            logger.warning("background-fill-failed", error=str(exc))

    def generate(self, request: GenerationRequest) -> list | float | int:
        """Produce ``request.count`` values, blocking through refills.

        Accepted values survive a refill; a failed refill fails the whole
        request and nothing partial is returned.
        """
        request.check()
        logger.debug(
            "generate-called",
            count=request.count,
            unique=request.unique,
            as_integer=request.as_integer,
        )
        values: list = []
        seen: set = set()
        while len(values) < request.count:
            value = float_from_window(self.buffer.next_window())
            if request.as_integer:
                value = project_int(value, request.low, request.high)
            if request.unique:
                if value in seen:
                    continue
                seen.add(value)
            values.append(value)

        if request.single:
            return values[0]
        return values
