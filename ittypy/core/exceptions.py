"""
Custom exceptions for media API operations.

Every failure aborts the operation that raised it; nothing is retried
locally.
"""
from typing import Optional, Any


class IttyException(Exception):
    """Base exception for all ittypy errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            status: HTTP status code (if available)
            body: Raw upstream response body (if available)
        """
        self.status = status
        self.body = body
        super().__init__(message)

    @property
    def reason(self) -> str:
        """Returns a human-readable reason for display."""
        return str(self) or "Something went wrong"


class ConfigurationError(IttyException):
    """Raised when a required setting (usually the API key) is missing."""
    pass


class UpstreamError(IttyException):
    """Raised when the upstream API answers with a non-success status."""
    pass


class ProtocolError(IttyException):
    """Raised when a success response is missing required fields."""
    pass


class UpstreamChunkError(UpstreamError):
    """Raised when the upload target rejects a chunk."""

    def __init__(
        self,
        status: int,
        body: Any = None,
        content_range: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            status: HTTP status of the rejected chunk
            body: Response body text
            content_range: Byte-range descriptor of the rejected chunk
        """
        self.content_range = content_range
        text = body if isinstance(body, str) else ""
        super().__init__(f"Chunk failed ({status}): {text}", status, body)


class NetworkError(IttyException):
    """Raised on transport failures (connection reset, timeout, DNS)."""
    pass


class UploadCancelledError(IttyException):
    """Raised when an upload is cancelled between two chunks."""
    pass
