"""Abstract base class for byte sources."""

from abc import ABC, abstractmethod


class ByteSource(ABC):
    """Something that can hand out *n* random bytes on request.

    Implementations must return exactly *n* bytes or raise
    :class:`~randomlib.errors.EntropySourceError`.
    """

    name: str = "unnamed"
    description: str = ""
    secure: bool = False

    @abstractmethod
    def request(self, n: int) -> bytes:
        """Return *n* random bytes."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} secure={self.secure}>"
