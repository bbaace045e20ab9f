"""
Async media API client.

Thin aiohttp transport that injects the bearer credential, decodes
responses and maps failures onto the ittypy exception hierarchy.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Any
import aiohttp

from .config import APIConfig
from .envelope import DecodedResponse, decode_envelope, error_message, parse_json
from ..exceptions import ConfigurationError, NetworkError, UpstreamError


@dataclass(frozen=True)
class APIResponse:
    """
    Decoded API response.

    Attributes:
        status: HTTP status code
        text: Raw response body
        payload: Parsed JSON body, or None
    """
    status: int
    text: str
    payload: Any = None

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    @property
    def envelope(self) -> DecodedResponse:
        """Returns the payload classified as enveloped or bare."""
        return decode_envelope(self.payload)

    @property
    def data(self) -> Any:
        """Returns the unwrapped payload."""
        return self.envelope.data


class AsyncAPIClient:
    """
    Asynchronous media API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling
    - Bearer credential injected per request, never logged

    Example:
        >>> config = APIConfig(api_key="sk_...")
        >>> async with AsyncAPIClient(config) as client:
        ...     response = await client.request('GET', 'tasks/task_123')
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            session: Optional shared session; the client never closes it
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._connector: Optional[aiohttp.TCPConnector] = None

        from ..logging import get_logger
        self._logger = get_logger('ittypy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close client and release resources it owns."""
        if not self._owns_session:
            return

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def require_credentials(self) -> str:
        """
        Returns the API key.

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not self._config.has_credentials:
            raise ConfigurationError("Missing ITTYBIT_API_KEY")
        return self._config.api_key

    def _build_headers(self) -> Dict[str, str]:
        return {
            'Authorization': f"Bearer {self.require_credentials()}",
            'Content-Type': 'application/json',
        }

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        fallback_message: str = "Upstream error",
        raise_for_status: bool = True
    ) -> APIResponse:
        """
        Make an authenticated request to the media API.

        Args:
            method: HTTP method
            path: API path relative to base_url (e.g. 'signatures')
            json: Optional JSON body
            params: Optional query string parameters
            fallback_message: Error message when upstream gives none
            raise_for_status: Raise UpstreamError on non-2xx (default True)

        Returns:
            Decoded API response

        Raises:
            ConfigurationError: If the API key is missing (no I/O performed)
            UpstreamError: If the API returns a non-2xx status
            NetworkError: On transport failure
        """
        headers = self._build_headers()
        session = await self.ensure_session()
        url = self._config.url_for(path)

        self._logger.debug(f"{method} {url}")

        try:
            async with session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                proxy=self._config.proxy_url
            ) as response:
                text = await response.text(errors='replace')
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.error(f"Network error on {method} {path}: {e}")
            raise NetworkError(f"Network error: {e}") from e

        self._logger.debug(f"Response {status}: {text[:1000] if len(text) > 1000 else text}")

        result = APIResponse(status=status, text=text, payload=parse_json(text))
        if raise_for_status and not result.ok:
            message = error_message(result.payload, text, fallback_message)
            self._logger.error(f"{method} {path} failed with HTTP {status}: {message}")
            raise UpstreamError(message, status=status, body=text)

        return result
