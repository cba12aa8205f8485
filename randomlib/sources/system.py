"""Operating-system and pseudo-random byte sources."""

from __future__ import annotations

import os

import numpy as np
import structlog

from randomlib.errors import EntropySourceError
from randomlib.sources.base import ByteSource

logger = structlog.get_logger(__name__)


class SystemByteSource(ByteSource):
    """Cryptographically secure bytes from the kernel CSPRNG (``os.urandom``)."""

    name = "system"
    description = "Kernel CSPRNG via os.urandom"
    secure = True

    def request(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropySourceError(f"os.urandom failed: {exc}") from exc


class PseudoRandomByteSource(ByteSource):
    """Fast, non-cryptographic bytes from numpy's PCG64.

    Seeded once through numpy SeedSequence.  Only meant as a stand-in
    when the secure source is down and the caller opted in.
    """

    name = "pcg64"
    description = "numpy PCG64 pseudo-random generator (not secure)"
    secure = False

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.Generator(np.random.PCG64(seed))

    def request(self, n: int) -> bytes:
        return self._rng.bytes(n)


class FallbackByteSource(ByteSource):
    """Try *primary*; on failure, serve from *fallback* instead."""

    name = "fallback"
    description = "Secure source with an opt-in insecure fallback"

    def __init__(self, primary: ByteSource, fallback: ByteSource) -> None:
        self.primary = primary
        self.fallback = fallback
        self.secure = primary.secure and fallback.secure
        self.fallbacks_used = 0

    def request(self, n: int) -> bytes:
        try:
            return self.primary.request(n)
        except EntropySourceError as exc:
            logger.warning(
                "insecure-fallback-used",
                primary=self.primary.name,
                fallback=self.fallback.name,
                error=str(exc),
            )
            self.fallbacks_used += 1
            return self.fallback.request(n)
