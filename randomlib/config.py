"""Generator configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

MIN_BUFFER_SIZE = 256
DEFAULT_BUFFER_SIZE = 512

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class GeneratorConfig:
    """Process-wide generator settings.

    ``buffer_size`` is the number of bytes fetched per fill.
    ``allow_insecure_fallback`` lets a non-cryptographic source stand in
    when the secure one fails.
    """

    buffer_size: int = DEFAULT_BUFFER_SIZE
    allow_insecure_fallback: bool = False

    def __post_init__(self) -> None:
        if self.buffer_size < MIN_BUFFER_SIZE:
            raise ValueError(
                f"buffer_size must be >= {MIN_BUFFER_SIZE}, got {self.buffer_size}"
            )

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        """Read ``RAND_BUFFER_SIZE`` and ``RAND_ALLOW_PRNG``.

        An unparseable or too small buffer size falls back to the default
        rather than failing.
        """
        size = DEFAULT_BUFFER_SIZE
        raw = os.environ.get("RAND_BUFFER_SIZE", "")
        try:
            if int(raw) >= MIN_BUFFER_SIZE:
                size = int(raw)
        except ValueError:
            pass
        allow = os.environ.get("RAND_ALLOW_PRNG", "").strip().lower() in _TRUTHY
        return cls(buffer_size=size, allow_insecure_fallback=allow)
