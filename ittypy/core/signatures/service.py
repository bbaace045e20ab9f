"""
Signing service.

Requests signed URLs and resumable upload sessions from the API's
/signatures endpoint.
"""
import time
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit, unquote

from .models import SignedUrl, UploadSession
from ..api import AsyncAPIClient
from ..exceptions import ProtocolError
from ..logging import get_logger

logger = get_logger('ittypy.signatures')

DEFAULT_FILENAME = 'untitled'


def infer_filename(value: Optional[str]) -> str:
    """
    Derive a file name from user input.

    URL-shaped input yields its last path segment, URL-decoded and without
    query string. Any other non-empty input is returned unchanged.

    Example:
        >>> infer_filename("https://cdn.example.com/media/My%20Clip.mp4?sig=1")
        'My Clip.mp4'
    """
    if not value:
        return DEFAULT_FILENAME

    parts = urlsplit(value)
    if not (parts.scheme and parts.netloc):
        return value

    last = parts.path.split('/')[-1] or DEFAULT_FILENAME
    return unquote(last.split('?')[0]) or DEFAULT_FILENAME


def split_path(path: str) -> Tuple[str, str]:
    """Split 'folder/sub/file.mp4' into ('folder/sub', 'file.mp4')."""
    parts = [p for p in (path or '').split('/') if p]
    filename = parts.pop() if parts else ''
    return '/'.join(parts), filename


class SignatureService:
    """
    Issues signed URLs and upload sessions.

    The API key travels inside the injected AsyncAPIClient; callers of the
    upload driver only ever see the resulting session URL.
    """

    def __init__(
        self,
        api: AsyncAPIClient,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize signing service.

        Args:
            api: Configured API client
            clock: Returns current Unix time (injectable for tests)
        """
        self._api = api
        self._clock = clock

    def _expiry(self, seconds: int) -> int:
        return int(self._clock()) + seconds

    async def _sign(
        self,
        body: Dict[str, Any],
        fallback: str,
        missing_url: str = "No signed URL returned"
    ) -> Dict[str, Any]:
        response = await self._api.request(
            'POST', 'signatures', json=body, fallback_message=fallback
        )
        data = response.data
        if not isinstance(data, dict) or not data.get('url'):
            raise ProtocolError(missing_url, status=response.status, body=response.text)
        return data

    async def create_upload_session(
        self,
        filename: Optional[str],
        folder: Optional[str] = None,
        total_size: int = 0
    ) -> UploadSession:
        """
        Request a resumable upload session.

        Args:
            filename: Target file name or URL-shaped name
            folder: Optional target folder
            total_size: Byte length of the source to upload

        Returns:
            UploadSession for a single upload

        Raises:
            ConfigurationError: If the API key is missing (no request sent)
            UpstreamError: If the signing endpoint rejects the request
            ProtocolError: If the response has no session URL
        """
        name = infer_filename(filename)
        expiry = self._expiry(self._api.config.upload_expiry)
        body = {
            'filename': name,
            'folder': folder,
            'method': 'put',
            'resumable': True,
            'expiry': expiry,
            'metadata': {'title': name},
        }

        logger.info(f"Requesting resumable session for {name}")
        data = await self._sign(
            body,
            "Failed to create resumable session",
            missing_url="No resumable URL returned"
        )

        file_info = data.get('file')
        file_url = file_info.get('url') if isinstance(file_info, dict) else None

        return UploadSession(
            upload_url=data['url'],
            expected_total_size=total_size,
            filename=name,
            folder=folder,
            expires_at=data.get('expiry', expiry),
            file_url=file_url,
            raw=data
        )

    async def sign_put(
        self,
        filename: Optional[str],
        folder: Optional[str] = None
    ) -> SignedUrl:
        """Sign a single-shot PUT upload URL."""
        name = infer_filename(filename)
        body = {
            'filename': name,
            'folder': folder,
            'method': 'put',
            'expiry': self._expiry(self._api.config.upload_expiry),
            'metadata': {'title': name},
        }
        data = await self._sign(body, "Failed to sign upload")
        return SignedUrl(
            url=data['url'],
            method=data.get('method', 'put'),
            expiry=data.get('expiry', body['expiry']),
            raw=data
        )

    async def sign_get(
        self,
        filename: str,
        folder: Optional[str] = None
    ) -> SignedUrl:
        """Sign a short-lived playback URL for a stored file."""
        body = {
            'filename': filename,
            'folder': folder,
            'method': 'get',
            'expiry': self._expiry(self._api.config.playback_expiry),
        }
        data = await self._sign(body, "Failed to sign URL")
        return SignedUrl(
            url=data['url'],
            method=data.get('method', 'get'),
            expiry=data.get('expiry', body['expiry']),
            raw=data
        )

    async def sign_path(self, path: str) -> SignedUrl:
        """Sign a playback URL for 'folder/.../filename'."""
        folder, filename = split_path(path)
        return await self.sign_get(filename, folder)
