"""
Chunking strategies for file uploads.

Implements Strategy Pattern for different chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from ..models import ChunkTransfer, DEFAULT_CHUNK_SIZE


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """Calculate chunk boundaries."""
        pass

    def iter_transfers(self, file_size: int) -> Iterator[ChunkTransfer]:
        """Yield ChunkTransfer descriptors in upload order."""
        for index, (start, end) in enumerate(self.calculate_chunks(file_size)):
            yield ChunkTransfer(
                index=index,
                range_start=start,
                range_end=end - 1,
                total_size=file_size
            )


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking strategy.

    Every chunk is chunk_size bytes except the last one, which carries the
    remainder. The size is not negotiated with the server.
    """

    DEFAULT_CHUNK_SIZE = DEFAULT_CHUNK_SIZE  # 16MB

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def calculate_chunks(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate fixed-size chunk boundaries.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of (start, end) tuples, end exclusive
        """
        if file_size == 0:
            return []

        chunks = []
        position = 0

        while position < file_size:
            end = min(position + self.chunk_size, file_size)
            chunks.append((position, end))
            position = end

        return chunks
