"""
randomlib: buffered random integers and floats from a secure byte source.

Fetches a block of cryptographically secure bytes, slices it into 7-byte
windows, and turns each window into a 53-bit float or a bounded integer.
The block is refetched transparently when it runs out.
"""

__version__ = "0.1.0"

from randomlib.buffer import BufferState, EntropyBuffer
from randomlib.config import GeneratorConfig
from randomlib.engine import GenerationEngine, GenerationRequest
from randomlib.errors import EntropySourceError, RandomLibError, RangeTooSmallError
from randomlib.generator import Generator
from randomlib.sources.base import ByteSource

__all__ = [
    "BufferState",
    "ByteSource",
    "EntropyBuffer",
    "EntropySourceError",
    "GenerationEngine",
    "GenerationRequest",
    "Generator",
    "GeneratorConfig",
    "RandomLibError",
    "RangeTooSmallError",
    "__version__",
]
