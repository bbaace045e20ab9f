"""
Protocol definitions for upload module.

Defines interfaces for dependency injection and strategy pattern.
"""
from typing import Any, Callable, List, Optional, Protocol, Tuple

from .models import ChunkTransfer


ProgressCallback = Callable[[int], None]


class ChunkingStrategy(Protocol):
    """
    Protocol for file chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate chunk boundaries for a file.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples representing chunk boundaries
        """
        ...


class ByteSource(Protocol):
    """Finite, seekable byte source of known length."""

    @property
    def size(self) -> int:
        """Total length in bytes."""
        ...

    @property
    def name(self) -> Optional[str]:
        """Suggested file name, if the source has one."""
        ...

    async def read_range(self, start: int, end: int) -> bytes:
        """Read bytes [start, end)."""
        ...

    async def close(self) -> None:
        ...


class ChunkUploaderProtocol(Protocol):
    """Protocol for chunk upload operations."""

    async def upload_chunk(self, transfer: ChunkTransfer, data: bytes) -> Any:
        """
        Upload a single chunk.

        Args:
            transfer: Byte span of the chunk
            data: Raw chunk bytes

        Returns:
            Classified server response
        """
        ...

    async def close(self) -> None:
        ...
