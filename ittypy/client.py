"""
IttyClient - High-level async client for the media API.

Example:
    >>> async with IttyClient(api_key="sk_...") as itty:
    ...     outcome = await itty.upload_resumable("movie.mp4", folder="videos")
    ...     print(outcome)
"""
import asyncio
from dataclasses import replace
from typing import Optional

import aiohttp

from .core.api import AsyncAPIClient, APIConfig
from .core.signatures import SignatureService, SignedUrl
from .core.tasks import IngestService, TaskOutcome, TaskPoller, TaskService, TaskStatus
from .core.upload import UploadConfig, UploadFacade, UploadOutcome
from .core.upload.facade import SourceLike
from .core.upload.protocols import ProgressCallback


class IttyClient:
    """
    High-level async client.

    Bundles the API transport, signing service, uploader and task services
    around one HTTP session and one explicit configuration.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        upload_config: Optional[UploadConfig] = None
    ):
        """
        Initialize client.

        Args:
            api_key: API key (overrides config.api_key when given)
            config: API configuration
            session: Optional shared aiohttp session (not closed by the client)
            upload_config: Chunk size and timeout for uploads
        """
        config = config or APIConfig.default()
        if api_key:
            config = replace(config, api_key=api_key)

        self._config = config
        self._api = AsyncAPIClient(config, session=session)
        self._signatures = SignatureService(self._api)
        self._uploads = UploadFacade(
            self._signatures,
            session=session,
            config=self._upload_config(config, upload_config),
            log_level=config.log_level
        )
        self._tasks = TaskService(self._api)
        self._ingest = IngestService(self._api, TaskPoller(self._tasks, config.poll))

    @staticmethod
    def _upload_config(config: APIConfig, upload_config: Optional[UploadConfig]) -> UploadConfig:
        """Carry proxy and connector settings over to upload PUTs unless set explicitly."""
        upload_config = upload_config or UploadConfig(timeout=config.timeout.total)
        if upload_config.proxy is None and config.proxy_url:
            upload_config = replace(upload_config, proxy=config.proxy_url)
        if not upload_config.connector_kwargs:
            upload_config = replace(upload_config, connector_kwargs=config.get_connector_kwargs())
        return upload_config

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def upload_config(self) -> UploadConfig:
        return self._uploads.config

    @property
    def api(self) -> AsyncAPIClient:
        return self._api

    async def __aenter__(self) -> 'IttyClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the HTTP session."""
        await self._api.close()

    async def upload_resumable(
        self,
        source: SourceLike,
        filename: Optional[str] = None,
        folder: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> UploadOutcome:
        """
        Upload in 16 MiB chunks through a resumable session.

        Returns:
            UploadComplete or UploadFailed
        """
        return await self._uploads.upload_resumable(
            source,
            filename=filename,
            folder=folder,
            progress_callback=progress_callback,
            cancel_event=cancel_event
        )

    async def upload(
        self,
        source: SourceLike,
        filename: Optional[str] = None,
        folder: Optional[str] = None
    ) -> UploadOutcome:
        """Upload in a single signed PUT."""
        return await self._uploads.upload(source, filename=filename, folder=folder)

    async def sign_playback(self, path: str) -> SignedUrl:
        """Sign a short-lived playback URL for 'folder/.../filename'."""
        return await self._signatures.sign_path(path)

    async def ingest_url(
        self,
        url: str,
        folder: Optional[str] = None,
        filename: Optional[str] = None
    ) -> TaskOutcome:
        """Import a file from a public URL, polling the ingest task if needed."""
        return await self._ingest.ingest_url(url, folder=folder, filename=filename)

    async def get_task_status(self, task_id: str) -> TaskStatus:
        """Look up a task once."""
        return await self._tasks.status(task_id)
