"""Public generator: integers and floats, delivered by Future or callback."""

from __future__ import annotations

import dataclasses
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from randomlib.buffer import EntropyBuffer
from randomlib.config import GeneratorConfig
from randomlib.engine import GenerationEngine, GenerationRequest
from randomlib.errors import RangeTooSmallError
from randomlib.sources import ByteSource, make_source

Callback = Callable[[BaseException | None, Any], None]


class Generator:
    """Buffered random number generator.

    Every ``random_*`` method returns a :class:`concurrent.futures.Future`
    unless *callback* is given, in which case it returns ``None`` and later
    calls ``callback(err, result)`` exactly once.

    Usage::

        rng = Generator()
        rng.random_ints(min=1, max=6, num=5).result()
        rng.random_float(callback=lambda err, x: print(x))
    """

    def __init__(
        self,
        buffer_size: int | None = None,
        source: ByteSource | None = None,
        config: GeneratorConfig | None = None,
        max_workers: int | None = None,
    ) -> None:
        config = config or GeneratorConfig.from_env()
        if buffer_size is not None:
            config = dataclasses.replace(config, buffer_size=buffer_size)
        self.config = config
        self.source = source or make_source(config)
        self.buffer = EntropyBuffer(self.source, config.buffer_size)
        self.engine = GenerationEngine(self.buffer)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="randomlib"
        )

    # ── integers ──

    def random_ints(self, min=0, max=10, num=10, unique=False, callback: Callback | None = None):
        """*num* integers in ``[min, max]``."""
        request = GenerationRequest(
            count=num, low=min, high=max, unique=unique, as_integer=True
        )
        return self._submit(request, callback)

    def random_unique_ints(self, min=0, max=10, num=10, callback: Callback | None = None):
        """*num* pairwise distinct integers in ``[min, max]``."""
        return self.random_ints(min=min, max=max, num=num, unique=True, callback=callback)

    def random_int(self, min=0, max=10, callback: Callback | None = None):
        """A single integer in ``[min, max]``."""
        request = GenerationRequest(
            count=1, low=min, high=max, as_integer=True, single=True
        )
        return self._submit(request, callback)

    # ── floats ──

    def random_floats(self, num=10, unique=False, callback: Callback | None = None):
        """*num* floats in ``[0, 1)``."""
        return self._submit(GenerationRequest(count=num, unique=unique), callback)

    def random_unique_floats(self, num=10, callback: Callback | None = None):
        return self.random_floats(num=num, unique=True, callback=callback)

    def random_float(self, callback: Callback | None = None):
        return self._submit(GenerationRequest(count=1, single=True), callback)

    # ── core ──

    def generate(self, request: GenerationRequest):
        """Blocking generation; raises instead of returning a Future."""
        return self.engine.generate(request)

    def _submit(self, request: GenerationRequest, callback: Callback | None) -> Future | None:
        try:
            request.check()
        except RangeTooSmallError as exc:
            if callback is not None:
                callback(exc, None)
                return None
            failed: Future = Future()
            failed.set_exception(exc)
            return failed

        future = self._executor.submit(self.engine.generate, request)
        if callback is None:
            return future
        future.add_done_callback(lambda f: _deliver(f, callback))
        return None

    def status(self) -> dict:
        return {
            "source": self.source.name,
            "secure": self.source.secure,
            "buffer": self.buffer.status(),
        }

    def close(self) -> None:
        """Wait for pending requests and stop the worker threads."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> Generator:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _deliver(future: Future, callback: Callback) -> None:
    error = future.exception()
    callback(error, None if error is not None else future.result())
