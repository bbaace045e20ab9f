"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

MiB = 1024 * 1024
DEFAULT_CHUNK_SIZE = 16 * MiB


@dataclass(frozen=True)
class ChunkTransfer:
    """
    Byte span of one chunk PUT.

    Attributes:
        index: Chunk index
        range_start: First byte offset
        range_end: Last byte offset (inclusive)
        total_size: Total source size in bytes
    """
    index: int
    range_start: int
    range_end: int
    total_size: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.range_end - self.range_start + 1

    @property
    def end(self) -> int:
        """Returns the exclusive end offset."""
        return self.range_end + 1

    @property
    def is_final(self) -> bool:
        """True for the chunk that reaches the end of the source."""
        return self.range_end + 1 == self.total_size

    @property
    def content_range(self) -> str:
        """Byte-range descriptor sent in the Content-Range header."""
        return f"bytes={self.range_start}-{self.range_end}/{self.total_size}"


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total file size
        uploaded_bytes: Bytes acknowledged so far
        total_chunks: Total number of chunks
        uploaded_chunks: Number of acknowledged chunks
        completed: Whether the server confirmed completion
    """
    total_bytes: int
    uploaded_bytes: int = 0
    total_chunks: int = 0
    uploaded_chunks: int = 0
    completed: bool = False

    @property
    def percent(self) -> int:
        """
        Returns progress as an integer percentage.

        Rounded half-up; stays at 99 or below until completion is confirmed.
        """
        if self.completed:
            return 100
        if self.total_bytes <= 0:
            return 0
        value = (self.uploaded_bytes * 200 + self.total_bytes) // (2 * self.total_bytes)
        return min(value, 99)

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.completed


@dataclass(frozen=True)
class UploadComplete:
    """
    Successful upload.

    Attributes:
        url: Playable resource URL
        total_bytes: Uploaded size
        chunks: Number of chunk PUTs sent
    """
    url: str
    total_bytes: int = 0
    chunks: int = 1

    @property
    def percent(self) -> int:
        return 100


@dataclass(frozen=True)
class UploadInProgress:
    """Intermediate upload state."""
    percent: int


@dataclass(frozen=True)
class UploadFailed:
    """
    Failed upload.

    Attributes:
        reason: Human-readable failure reason
        error: Underlying exception (if any)
    """
    reason: str
    error: Optional[Exception] = None


UploadOutcome = Union[UploadComplete, UploadInProgress, UploadFailed]


@dataclass
class UploadConfig:
    """
    Configuration for chunked uploads.

    Attributes:
        chunk_size: Bytes per chunk PUT
        timeout: Per-chunk request timeout in seconds
        cancel_event: Set to stop the upload before the next chunk
        proxy: Proxy URL for upload PUTs
        connector_kwargs: TCPConnector settings (limits, SSL) for PUT sessions
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    timeout: float = 300
    cancel_event: Optional[asyncio.Event] = None
    proxy: Optional[str] = None
    connector_kwargs: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
