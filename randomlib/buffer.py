"""Reusable entropy buffer consumed in 7-byte windows.

The buffer is fetched wholesale from a :class:`ByteSource`, read front to
back, and refetched once fewer than seven bytes remain.  All reads and
refills go through one lock; at most one fetch runs at a time and every
thread that finds the buffer exhausted waits on that single fetch.
"""

from __future__ import annotations

import enum
import threading

import structlog

from randomlib.config import DEFAULT_BUFFER_SIZE, MIN_BUFFER_SIZE
from randomlib.derive import WINDOW_SIZE
from randomlib.errors import EntropySourceError
from randomlib.sources.base import ByteSource

logger = structlog.get_logger(__name__)


class BufferState(enum.Enum):
    EMPTY = "empty"
    FILLING = "filling"
    READY = "ready"


class EntropyBuffer:
    """Thread-safe byte buffer with coalesced refills.

    Usage::

        buf = EntropyBuffer(SystemByteSource())
        window = buf.next_window()   # blocks through the first fill
    """

    def __init__(self, source: ByteSource, size: int = DEFAULT_BUFFER_SIZE) -> None:
        if size < MIN_BUFFER_SIZE:
            raise ValueError(f"buffer size must be >= {MIN_BUFFER_SIZE}, got {size}")
        self._source = source
        self.size = size
        self._bytes = b""
        self._position = 0
        self._state = BufferState.EMPTY
        self._lock = threading.Lock()
        self._filled = threading.Condition(self._lock)
        self._fill_in_flight = False
        # bumped once per finished fetch, successful or not
        self._fill_count = 0
        self._last_error: EntropySourceError | None = None
        self._fetches = 0
        self._draws = 0
        self._waiting = 0

    # ── state ──

    @property
    def state(self) -> BufferState:
        with self._lock:
            return self._state

    @property
    def position(self) -> int:
        with self._lock:
            return self._position

    @property
    def remaining(self) -> int:
        with self._lock:
            return len(self._bytes) - self._position

    @property
    def fetches(self) -> int:
        """Number of fetches issued to the byte source."""
        with self._lock:
            return self._fetches

    def status(self) -> dict:
        with self._lock:
            return {
                "state": self._state.value,
                "size": self.size,
                "position": self._position,
                "remaining": len(self._bytes) - self._position,
                "fill_in_flight": self._fill_in_flight,
                "fetches": self._fetches,
                "draws": self._draws,
                "waiting": self._waiting,
                "last_error": str(self._last_error) if self._last_error else None,
            }

    # ── draws ──

    def try_draw(self) -> bytes | None:
        """Return the next window, or ``None`` if a refill is needed first."""
        with self._lock:
            return self._draw_locked()

    def _draw_locked(self) -> bytes | None:
        if self._state is not BufferState.READY:
            return None
        if len(self._bytes) - self._position < WINDOW_SIZE:
            return None
        start = self._position
        self._position += WINDOW_SIZE
        self._draws += 1
        return self._bytes[start:self._position]

    def next_window(self) -> bytes:
        """Return the next window, refilling or waiting for a refill as needed.

        Raises :class:`EntropySourceError` if the fill this call ends up
        waiting on fails.
        """
        while True:
            with self._lock:
                window = self._draw_locked()
                if window is not None:
                    return window
                if self._state is BufferState.READY:
                    logger.debug("buffer-exhausted", position=self._position)
                seen = self._fill_count
                if not self._claim_fill_locked():
                    logger.debug("waiting-for-ready", state=self._state.value)
                    self._waiting += 1
                    try:
                        while self._fill_count == seen:
                            self._filled.wait()
                    finally:
                        self._waiting -= 1
                    if self._last_error is not None:
                        raise EntropySourceError(str(self._last_error)) from self._last_error
                    continue
            self.fill()

    # ── refill ──

    def begin_fill(self) -> bool:
        """Claim the next fill.

        Returns False when a fill is already in flight; the caller should
        then wait for it instead of fetching again.
        """
        with self._lock:
            return self._claim_fill_locked()

    def _claim_fill_locked(self) -> bool:
        if self._fill_in_flight:
            return False
        self._fill_in_flight = True
        self._state = BufferState.FILLING
        return True

    def fill(self) -> None:
        """Fetch a full buffer and wake everyone waiting on it.

        Must follow a successful :meth:`begin_fill`.  On failure nothing is
        installed, the state stays ``FILLING`` and the error is both raised
        here and handed to every waiter.
        """
        logger.debug("buffer-filling", size=self.size, source=self._source.name)
        with self._lock:
            self._fetches += 1
        try:
            data = self._source.request(self.size)
            if len(data) != self.size:
                raise EntropySourceError(
                    f"source {self._source.name!r} returned {len(data)} bytes, "
                    f"expected {self.size}"
                )
        except EntropySourceError as exc:
            self._fill_failed(exc)
            raise
        except Exception as exc:
            error = EntropySourceError(f"source {self._source.name!r} failed: {exc}")
            self._fill_failed(error)
            raise error from exc
        except BaseException as exc:
            self._fill_failed(EntropySourceError(f"fill interrupted: {exc!r}"))
            raise

        self._finish_fill(bytes(data), None)
        logger.debug("buffer-filled", size=self.size)

    def _fill_failed(self, error: EntropySourceError) -> None:
        logger.debug("buffer-fill-failed", error=str(error))
        self._finish_fill(None, error)

    def _finish_fill(self, data: bytes | None, error: EntropySourceError | None) -> None:
        with self._filled:
            if data is not None:
                self._bytes = data
                self._position = 0
                self._state = BufferState.READY
            self._last_error = error
            self._fill_in_flight = False
            self._fill_count += 1
            self._filled.notify_all()
