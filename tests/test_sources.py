"""Tests for byte sources."""

import pytest

from randomlib.config import GeneratorConfig
from randomlib.errors import EntropySourceError
from randomlib.sources import (
    ALL_SOURCES,
    FallbackByteSource,
    PseudoRandomByteSource,
    SystemByteSource,
    make_source,
)
from randomlib.sources.base import ByteSource
from tests.fakes import FakeSource


class TestSystem:
    def test_length(self):
        assert len(SystemByteSource().request(512)) == 512

    def test_secure(self):
        assert SystemByteSource().secure

    def test_output_varies(self):
        src = SystemByteSource()
        assert src.request(32) != src.request(32)

    def test_os_error_wrapped(self, monkeypatch):
        def broken(n):
            raise OSError("no entropy")

        monkeypatch.setattr("randomlib.sources.system.os.urandom", broken)
        with pytest.raises(EntropySourceError):
            SystemByteSource().request(16)


class TestPseudoRandom:
    def test_not_secure(self):
        assert not PseudoRandomByteSource().secure

    def test_seeded_is_reproducible(self):
        assert PseudoRandomByteSource(42).request(64) == PseudoRandomByteSource(42).request(64)

    def test_length(self):
        assert len(PseudoRandomByteSource().request(300)) == 300


class TestFallback:
    def test_uses_primary_when_healthy(self):
        primary, fallback = FakeSource(), FakeSource()
        src = FallbackByteSource(primary, fallback)
        src.request(16)
        assert (primary.requests, fallback.requests) == (1, 0)
        assert src.fallbacks_used == 0

    def test_falls_back_on_failure(self):
        src = FallbackByteSource(FakeSource(failures=1), PseudoRandomByteSource(1))
        assert len(src.request(16)) == 16
        assert src.fallbacks_used == 1
        assert not src.secure

    def test_fallback_failure_propagates(self):
        src = FallbackByteSource(FakeSource(failures=1), FakeSource(failures=1))
        with pytest.raises(EntropySourceError):
            src.request(16)


class TestMakeSource:
    def test_default_is_system(self):
        assert isinstance(make_source(GeneratorConfig()), SystemByteSource)

    def test_opt_in_fallback(self):
        src = make_source(GeneratorConfig(allow_insecure_fallback=True))
        assert isinstance(src, FallbackByteSource)
        assert isinstance(src.primary, SystemByteSource)


class TestAllSourcesMetadata:
    @pytest.mark.parametrize("cls", ALL_SOURCES, ids=lambda c: c.name)
    def test_is_byte_source(self, cls):
        assert issubclass(cls, ByteSource)

    @pytest.mark.parametrize("cls", ALL_SOURCES, ids=lambda c: c.name)
    def test_has_name(self, cls):
        assert isinstance(cls.name, str) and len(cls.name) > 0
