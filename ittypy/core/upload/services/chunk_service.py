"""
Chunk upload service.

Handles PUT requests against a signed upload URL.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import time
import asyncio
import aiohttp

from ..models import ChunkTransfer
from ...api.envelope import parse_json
from ...exceptions import NetworkError, UpstreamChunkError


@dataclass(frozen=True)
class ChunkResponse:
    """
    Accepted chunk response.

    Attributes:
        status: HTTP status (one of ACCEPTED_STATUSES)
        text: Response body
        payload: Parsed JSON body, or None
    """
    status: int
    text: str = ''
    payload: Any = None

    @property
    def is_partial(self) -> bool:
        """True when the server expects more data (202 Accepted)."""
        return self.status == 202

    @property
    def resource_url(self) -> Optional[str]:
        """Resource URL carried by the body, if any."""
        if isinstance(self.payload, dict):
            url = self.payload.get('url')
            if isinstance(url, str) and url:
                return url
        return None


class ChunkUploader:
    """
    Sends chunks to a resumable session URL.

    Reuses one HTTP session for all chunks. Sends no credentials: the
    session URL carries its own signature.

    Responsibilities:
    - PUT chunks with a Content-Range header
    - Classify HTTP responses
    - Map transport failures to NetworkError
    """

    DEFAULT_TIMEOUT = 300
    ACCEPTED_STATUSES = frozenset({200, 201, 202, 204})

    def __init__(
        self,
        upload_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
        proxy: Optional[str] = None,
        connector_kwargs: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize chunk uploader.

        Args:
            upload_url: Session URL
            timeout: Request timeout in seconds
            session: Optional shared session (never closed here)
            proxy: Proxy URL sent with every PUT
            connector_kwargs: TCPConnector settings (limits, SSL) for an owned session
        """
        self._upload_url = upload_url
        self._timeout = timeout
        self._session = session
        self._proxy = proxy
        self._connector_kwargs = connector_kwargs or {'limit': 10}
        self._owns_session = False
        self._logger = logging.getLogger('ittypy.upload.chunk')

    @property
    def upload_url(self) -> str:
        """Returns the upload URL."""
        return self._upload_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(keepalive_timeout=30, **self._connector_kwargs)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def _put(self, data: bytes, headers: Dict[str, str], label: str):
        session = await self._get_session()
        upload_start = time.time()
        try:
            async with session.put(
                self._upload_url,
                data=data,
                headers=headers,
                proxy=self._proxy,
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            ) as response:
                text = await response.text(errors='replace')
                status = response.status
        except asyncio.TimeoutError as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"{label} timeout after {upload_time:.2f}s (timeout={self._timeout}s)")
            raise NetworkError(f"{label} timed out after {self._timeout}s") from e
        except aiohttp.ClientError as e:
            upload_time = time.time() - upload_start
            self._logger.error(f"{label} failed after {upload_time:.2f}s: {e}")
            raise NetworkError(f"Network error: {e}") from e

        upload_time = time.time() - upload_start
        size_kb = len(data) / 1024
        speed_kbps = (size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(f"{label} answered {status} in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)")
        return status, text

    async def upload_chunk(
        self,
        transfer: ChunkTransfer,
        data: bytes
    ) -> ChunkResponse:
        """
        Upload a single chunk.

        Args:
            transfer: Byte span of the chunk
            data: Raw chunk bytes

        Returns:
            Accepted response

        Raises:
            ValueError: If data does not match the transfer size
            UpstreamChunkError: If the server rejects the chunk
            NetworkError: If a transport error occurs
        """
        if len(data) != transfer.size:
            raise ValueError(
                f"Chunk {transfer.index} has {len(data)} bytes, expected {transfer.size}"
            )

        headers = {'Content-Range': transfer.content_range}
        self._logger.debug(
            f"Uploading chunk {transfer.index} {transfer.content_range} ({len(data) / 1024:.1f} KB)"
        )
        status, text = await self._put(data, headers, f"Chunk {transfer.index}")
        return self._process_response(status, text, transfer)

    async def upload_whole(self, data: bytes) -> ChunkResponse:
        """
        Upload the entire payload in one PUT.

        Returns a ChunkResponse for any status; the caller decides which
        statuses count as success.
        """
        status, text = await self._put(data, {}, "Upload")
        return ChunkResponse(status=status, text=text, payload=parse_json(text))

    def _process_response(
        self,
        status: int,
        text: str,
        transfer: ChunkTransfer
    ) -> ChunkResponse:
        """
        Classify a chunk response.

        Raises:
            UpstreamChunkError: If the status is not an accepted one
        """
        if status not in self.ACCEPTED_STATUSES:
            self._logger.error(f"Server returned {status} for chunk {transfer.index}")
            raise UpstreamChunkError(status, text, content_range=transfer.content_range)

        return ChunkResponse(status=status, text=text, payload=parse_json(text))
