"""Tests for the entropy buffer."""

import threading

import pytest

from randomlib.buffer import BufferState, EntropyBuffer
from randomlib.errors import EntropySourceError
from tests.fakes import FakeSource, wait_for


def _ready(source, size=256):
    buf = EntropyBuffer(source, size)
    assert buf.begin_fill()
    buf.fill()
    return buf


class TestLifecycle:
    def test_starts_empty(self, fake_source):
        buf = EntropyBuffer(fake_source)
        assert buf.state is BufferState.EMPTY
        assert buf.try_draw() is None
        assert fake_source.requests == 0

    def test_default_size(self, fake_source):
        assert EntropyBuffer(fake_source).size == 512

    def test_too_small(self, fake_source):
        with pytest.raises(ValueError):
            EntropyBuffer(fake_source, 255)

    def test_fill_makes_ready(self):
        buf = _ready(FakeSource(pattern=bytes(range(256))))
        assert buf.state is BufferState.READY
        assert buf.position == 0
        assert buf.remaining == 256

    def test_draw_advances_by_seven(self):
        buf = _ready(FakeSource(pattern=bytes(range(256))))
        assert buf.try_draw() == bytes(range(7))
        assert buf.try_draw() == bytes(range(7, 14))
        assert buf.position == 14

    def test_exhaustion(self):
        buf = _ready(FakeSource())
        windows = [buf.try_draw() for _ in range(36)]
        assert all(w is not None and len(w) == 7 for w in windows)
        assert buf.remaining == 4
        assert buf.try_draw() is None

    def test_next_window_refills(self):
        source = FakeSource()
        buf = EntropyBuffer(source, 256)
        for _ in range(37):
            buf.next_window()
        assert source.requests == 2
        assert buf.position == 7


class TestFill:
    def test_second_claim_refused(self, fake_source):
        buf = EntropyBuffer(fake_source)
        assert buf.begin_fill()
        assert not buf.begin_fill()
        assert buf.state is BufferState.FILLING

    def test_failure_installs_nothing(self):
        source = FakeSource(pattern=b"\x01")
        buf = _ready(source)
        buf.try_draw()
        source.failures = 1
        assert buf.begin_fill()
        with pytest.raises(EntropySourceError):
            buf.fill()
        assert buf.state is BufferState.FILLING
        assert buf.position == 7
        assert buf.try_draw() is None
        assert buf.status()["last_error"] == "fake source failure"

    def test_recovers_after_failure(self):
        source = FakeSource(failures=1)
        buf = EntropyBuffer(source, 256)
        with pytest.raises(EntropySourceError):
            buf.next_window()
        assert len(buf.next_window()) == 7
        assert buf.state is BufferState.READY
        assert source.requests == 2

    def test_short_read(self):
        class Short(FakeSource):
            def request(self, n):
                return bytes(n - 1)

        buf = EntropyBuffer(Short(), 256)
        assert buf.begin_fill()
        with pytest.raises(EntropySourceError):
            buf.fill()

    def test_foreign_exception_wrapped(self):
        class Broken(FakeSource):
            def request(self, n):
                raise RuntimeError("boom")

        buf = EntropyBuffer(Broken(), 256)
        with pytest.raises(EntropySourceError) as info:
            buf.next_window()
        assert isinstance(info.value.__cause__, RuntimeError)
        assert not buf.status()["fill_in_flight"]

    def test_interrupted_fill_releases_claim(self):
        class Interrupted(FakeSource):
            def request(self, n):
                if self.requests == 0:
                    self.requests += 1
                    raise KeyboardInterrupt
                return super().request(n)

        source = Interrupted()
        buf = EntropyBuffer(source, 256)
        with pytest.raises(KeyboardInterrupt):
            buf.next_window()
        assert not buf.status()["fill_in_flight"]
        assert "fill interrupted" in buf.status()["last_error"]

        results = []
        t = threading.Thread(target=lambda: results.append(buf.next_window()))
        t.start()
        t.join(timeout=5)
        assert not t.is_alive()
        assert len(results) == 1 and len(results[0]) == 7


class TestConcurrency:
    def _start(self, buf, n, results, errors):
        def worker():
            try:
                results.append(buf.next_window())
            except EntropySourceError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(n)]
        for t in threads:
            t.start()
        return threads

    def test_refills_coalesce(self):
        gate = threading.Event()
        source = FakeSource(gate=gate)
        buf = EntropyBuffer(source, 512)
        results, errors = [], []
        threads = self._start(buf, 8, results, errors)
        wait_for(lambda: buf.status()["waiting"] == 7)
        gate.set()
        for t in threads:
            t.join(timeout=5)
        assert source.requests == 1
        assert not errors
        assert len(results) == 8
        assert buf.position == 8 * 7

    def test_failure_reaches_every_waiter(self):
        gate = threading.Event()
        source = FakeSource(failures=1, gate=gate)
        buf = EntropyBuffer(source, 256)
        results, errors = [], []
        threads = self._start(buf, 5, results, errors)
        wait_for(lambda: buf.status()["waiting"] == 4)
        gate.set()
        for t in threads:
            t.join(timeout=5)
        assert len(errors) == 5
        assert not results
        assert source.requests == 1

    def test_parallel_draws_never_overlap(self):
        buf = _ready(FakeSource(), size=4096)
        misses = []

        def worker():
            for _ in range(50):
                if buf.try_draw() is None:
                    misses.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert not misses
        assert buf.position == 8 * 50 * 7
        assert buf.status()["draws"] == 400
