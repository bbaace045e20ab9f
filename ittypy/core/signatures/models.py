"""
Data models for signed URLs and upload sessions.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def strip_query(url: str) -> str:
    """Returns url without its query string."""
    return url.split('?', 1)[0]


@dataclass(frozen=True)
class SignedUrl:
    """
    A signed URL issued by the signing service.

    Attributes:
        url: Signed URL
        method: HTTP method the signature is valid for
        expiry: Unix timestamp after which the URL stops working
        raw: Unwrapped signature payload
    """
    url: str
    method: str
    expiry: int
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def clean_url(self) -> str:
        """Returns the URL without its signature query string."""
        return strip_query(self.url)


@dataclass(frozen=True)
class UploadSession:
    """
    One-time resumable upload session.

    Created once by the signing service and consumed by a single upload
    driver; never persisted and never reused for another source.

    Attributes:
        upload_url: Session URL accepting byte-range PUTs
        expected_total_size: Byte length of the source
        filename: Sanitized target file name
        folder: Target folder (if any)
        expires_at: Unix timestamp of session expiry
        file_url: Resource URL announced by the signing service (if any)
        raw: Unwrapped signature payload
    """
    upload_url: str
    expected_total_size: int
    filename: str
    folder: Optional[str] = None
    expires_at: Optional[int] = None
    file_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def resource_url_fallback(self) -> str:
        """Resource URL to report when the final chunk response has none."""
        return self.file_url or strip_query(self.upload_url)
