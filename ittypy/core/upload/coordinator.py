"""
Upload coordinator.

Drives a resumable session: one chunk at a time, in order, until the
server confirms completion or something fails.
"""
import logging
import time
from typing import AsyncIterator, Callable, Optional, Union

import aiohttp

from .models import (
    UploadComplete,
    UploadConfig,
    UploadInProgress,
    UploadProgress,
)
from .protocols import ByteSource, ChunkUploaderProtocol, ProgressCallback
from .services import ChunkUploader
from .strategies import BaseChunkingStrategy, FixedSizeChunkingStrategy
from ..exceptions import ProtocolError, UploadCancelledError
from ..signatures import UploadSession

logger = logging.getLogger('ittypy.upload.coordinator')


class UploadCoordinator:
    """
    Coordinates a chunked upload against one session.

    State machine:
        Sending(0) -> Sending(end) -> ... -> Completed(url) | Failed

    - Accepted non-final chunks (200/201/202/204) advance the offset.
    - The final chunk must be answered with 200/201/204; a 202 there means
      the server never confirmed completion and raises ProtocolError.
    - Any other status raises UpstreamChunkError; there is no retry and no
      resumption from the failed offset.

    Chunks are never sent concurrently. Cancellation is only honoured
    between chunks.
    """

    def __init__(
        self,
        chunking_strategy: Optional[BaseChunkingStrategy] = None,
        config: Optional[UploadConfig] = None,
        session: Optional[aiohttp.ClientSession] = None,
        uploader_factory: Optional[Callable[[str], ChunkUploaderProtocol]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            chunking_strategy: Strategy for chunking sources
            config: Chunk size, timeout and cancellation settings
            session: Optional shared HTTP session for chunk PUTs
            uploader_factory: Builds the chunk uploader for a session URL
        """
        self._config = config or UploadConfig()
        self._chunking = chunking_strategy or FixedSizeChunkingStrategy(self._config.chunk_size)
        self._session = session
        self._uploader_factory = uploader_factory or self._default_uploader

    @property
    def config(self) -> UploadConfig:
        return self._config

    def _default_uploader(self, upload_url: str) -> ChunkUploader:
        return ChunkUploader(
            upload_url,
            self._config.timeout,
            session=self._session,
            proxy=self._config.proxy,
            connector_kwargs=self._config.connector_kwargs
        )

    def _check_cancelled(self, offset: int) -> None:
        event = self._config.cancel_event
        if event is not None and event.is_set():
            logger.info(f"Upload cancelled at offset {offset}")
            raise UploadCancelledError(f"Upload cancelled at byte {offset}")

    async def iter_upload(
        self,
        session: UploadSession,
        source: ByteSource
    ) -> AsyncIterator[Union[UploadInProgress, UploadComplete]]:
        """
        Upload a source, yielding progress after every chunk.

        Args:
            session: Upload session from the signing service
            source: Byte source of known size

        Yields:
            UploadInProgress after each non-final chunk, then UploadComplete

        Raises:
            ValueError: If the source is empty or its size mismatches the session
            UpstreamChunkError: If a chunk is rejected
            NetworkError: On transport failure
            ProtocolError: If the final chunk is not acknowledged as complete
            UploadCancelledError: If cancel_event is set between chunks
        """
        total = source.size
        if total <= 0:
            raise ValueError("Cannot upload empty file")
        if session.expected_total_size and session.expected_total_size != total:
            raise ValueError(
                f"Source has {total} bytes, session expects {session.expected_total_size}"
            )

        chunks = self._chunking.calculate_chunks(total)
        progress = UploadProgress(total_bytes=total, total_chunks=len(chunks))
        total_mb = total / (1024 * 1024)
        logger.info(f"Uploading {session.filename}: {total_mb:.2f} MB in {len(chunks)} chunks")

        uploader = self._uploader_factory(session.upload_url)
        started = time.time()
        try:
            for transfer in self._chunking.iter_transfers(total):
                self._check_cancelled(transfer.range_start)

                data = await source.read_range(transfer.range_start, transfer.end)
                response = await uploader.upload_chunk(transfer, data)
                del data

                progress.uploaded_bytes = transfer.end
                progress.uploaded_chunks = transfer.index + 1

                if not transfer.is_final:
                    yield UploadInProgress(progress.percent)
                    continue

                if response.is_partial:
                    raise ProtocolError(
                        "Upload did not complete: final chunk answered with 202",
                        status=response.status,
                        body=response.text
                    )

                progress.completed = True
                url = response.resource_url or session.resource_url_fallback
                elapsed = time.time() - started
                logger.info(f"Upload complete in {elapsed:.2f}s: {url}")
                yield UploadComplete(url=url, total_bytes=total, chunks=len(chunks))
                return
        finally:
            await uploader.close()

        # Strategy produced no terminal chunk
        raise ProtocolError("Chunking strategy did not cover the whole source")

    async def upload(
        self,
        session: UploadSession,
        source: ByteSource,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadComplete:
        """
        Upload a source and return the completed result.

        Args:
            session: Upload session from the signing service
            source: Byte source of known size
            progress_callback: Called with 0-100 after every chunk

        Returns:
            UploadComplete with the resource URL
        """
        result = None
        async for state in self.iter_upload(session, source):
            if progress_callback:
                progress_callback(state.percent)
            if isinstance(state, UploadComplete):
                result = state
        return result
