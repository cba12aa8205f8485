"""Byte source implementations."""

from __future__ import annotations

from randomlib.config import GeneratorConfig
from randomlib.sources.base import ByteSource
from randomlib.sources.system import (
    FallbackByteSource,
    PseudoRandomByteSource,
    SystemByteSource,
)

ALL_SOURCES: list[type[ByteSource]] = [
    SystemByteSource,
    PseudoRandomByteSource,
]


def make_source(config: GeneratorConfig) -> ByteSource:
    """Build the byte source described by *config*."""
    source: ByteSource = SystemByteSource()
    if config.allow_insecure_fallback:
        source = FallbackByteSource(source, PseudoRandomByteSource())
    return source


__all__ = [
    "ALL_SOURCES",
    "ByteSource",
    "FallbackByteSource",
    "PseudoRandomByteSource",
    "SystemByteSource",
    "make_source",
]
