"""
URL ingest service.

Imports a public URL: first through the Files API directly, then through
an ingest task that is polled for its output.
"""
from typing import Optional

from .models import MediaFile, Task, TaskCompleted, TaskOutcome
from .poller import TaskPoller
from ..api import AsyncAPIClient
from ..exceptions import ProtocolError
from ..logging import get_logger

logger = get_logger('ittypy.ingest')


class IngestService:
    """Creates files from public URLs."""

    def __init__(self, api: AsyncAPIClient, poller: TaskPoller):
        self._api = api
        self._poller = poller

    async def _create_file(
        self,
        url: str,
        folder: Optional[str],
        filename: Optional[str]
    ) -> Optional[MediaFile]:
        response = await self._api.request(
            'POST',
            'files',
            json={'url': url, 'folder': folder, 'filename': filename},
            raise_for_status=False
        )
        data = response.data
        if response.ok and MediaFile.is_file_payload(data):
            return MediaFile.from_dict(data)

        logger.debug(f"Direct import unavailable (HTTP {response.status}), falling back to task")
        return None

    async def _create_task(
        self,
        url: str,
        folder: Optional[str],
        filename: Optional[str]
    ) -> Task:
        response = await self._api.request(
            'POST',
            'tasks',
            json={'kind': 'ingest', 'url': url, 'folder': folder, 'filename': filename},
            fallback_message="Failed to create ingest task"
        )
        task = Task.from_dict(response.data)
        if not task.id:
            raise ProtocolError("Ingest task response has no id", status=response.status, body=response.text)
        return task

    async def ingest_url(
        self,
        url: str,
        folder: Optional[str] = None,
        filename: Optional[str] = None
    ) -> TaskOutcome:
        """
        Import a file from a public URL.

        Args:
            url: Public source URL
            folder: Optional target folder
            filename: Optional target file name

        Returns:
            TaskCompleted, TaskFailed or TaskTimedOut

        Raises:
            ValueError: If url is empty
            ConfigurationError: If the API key is missing
            UpstreamError: If the ingest task cannot be created
        """
        if not url or not isinstance(url, str):
            raise ValueError("Missing 'url'")
        self._api.require_credentials()

        file = await self._create_file(url, folder, filename)
        if file is not None:
            logger.info(f"Imported {url} as {file.id}")
            return TaskCompleted(file=file)

        task = await self._create_task(url, folder, filename)
        logger.info(f"Created ingest task {task.id} for {url}")
        return await self._poller.poll(task)
