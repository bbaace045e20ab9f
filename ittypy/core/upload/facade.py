"""
Upload facade.

Provides a simplified interface for file uploads.
Follows Facade Pattern - hides signing, chunking and HTTP details.
"""
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union
import asyncio
import logging

import aiohttp

from .coordinator import UploadCoordinator
from .models import UploadComplete, UploadConfig, UploadFailed, UploadOutcome
from .protocols import ByteSource, ProgressCallback
from .services import ChunkUploader, open_source
from .strategies import BaseChunkingStrategy
from ..exceptions import IttyException, UpstreamError
from ..signatures import SignatureService

SourceLike = Union[str, Path, bytes, bytearray, ByteSource]


def describe_failure(error: Exception) -> str:
    """Human-readable reason for a failed upload."""
    if isinstance(error, IttyException):
        message = error.reason
    else:
        message = str(error) or "Upload failed"
    if "Upload not found" in message:
        return f"{message}. Please retry."
    return message


class UploadFacade:
    """
    Simplified interface for media uploads.

    Failures never escape upload_resumable() or upload(); they come back as
    UploadFailed with a readable reason.

    Example:
        >>> uploader = UploadFacade(SignatureService(api))
        >>> outcome = await uploader.upload_resumable("movie.mp4", folder="videos")
        >>> if isinstance(outcome, UploadComplete):
        ...     print(outcome.url)
    """

    def __init__(
        self,
        signatures: SignatureService,
        session: Optional[aiohttp.ClientSession] = None,
        config: Optional[UploadConfig] = None,
        chunking_strategy: Optional[BaseChunkingStrategy] = None,
        log_level: int = logging.INFO
    ):
        """
        Initialize upload facade.

        Args:
            signatures: Signing service (holds the API credential)
            session: Optional shared HTTP session for upload PUTs
            config: Chunk size and timeout defaults
            chunking_strategy: Optional custom chunking strategy
            log_level: Logging level
        """
        self._logger = logging.getLogger('ittypy.upload')
        self._logger.setLevel(log_level)

        self._signatures = signatures
        self._session = session
        self._config = config or UploadConfig()
        self._chunking = chunking_strategy

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def upload_resumable(
        self,
        source: SourceLike,
        filename: Optional[str] = None,
        folder: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> UploadOutcome:
        """
        Upload through a resumable session in fixed-size chunks.

        Args:
            source: File path, raw bytes, or a byte source
            filename: Target name (defaults to the source's file name)
            folder: Optional target folder
            progress_callback: Called with 0-100 after every chunk
            cancel_event: Set to stop before the next chunk

        Returns:
            UploadComplete or UploadFailed
        """
        byte_source = None
        try:
            byte_source = open_source(source)
            name = filename or byte_source.name
            upload_session = await self._signatures.create_upload_session(
                name, folder, total_size=byte_source.size
            )

            config = replace(self._config, cancel_event=cancel_event)
            coordinator = UploadCoordinator(
                chunking_strategy=self._chunking,
                config=config,
                session=self._session
            )
            return await coordinator.upload(upload_session, byte_source, progress_callback)
        except (IttyException, OSError, ValueError) as e:
            reason = describe_failure(e)
            self._logger.error(f"Resumable upload failed: {reason}")
            return UploadFailed(reason=reason, error=e)
        finally:
            if byte_source is not None:
                await byte_source.close()

    async def upload(
        self,
        source: SourceLike,
        filename: Optional[str] = None,
        folder: Optional[str] = None
    ) -> UploadOutcome:
        """
        Upload in a single PUT to a signed URL.

        Only 201 Created counts as success.

        Returns:
            UploadComplete or UploadFailed
        """
        byte_source = None
        uploader = None
        try:
            byte_source = open_source(source)
            signed = await self._signatures.sign_put(filename or byte_source.name, folder)
            data = await byte_source.read_range(0, byte_source.size)

            uploader = ChunkUploader(
                signed.url,
                self._config.timeout,
                session=self._session,
                proxy=self._config.proxy,
                connector_kwargs=self._config.connector_kwargs
            )
            response = await uploader.upload_whole(data)

            if response.status != 201:
                raise UpstreamError(
                    f"Upload failed: {response.status} {response.text}",
                    status=response.status,
                    body=response.text
                )

            url = response.resource_url or signed.clean_url
            self._logger.info(f"Upload complete: {url}")
            return UploadComplete(url=url, total_bytes=byte_source.size, chunks=1)
        except (IttyException, OSError, ValueError) as e:
            reason = describe_failure(e)
            self._logger.error(f"Upload failed: {reason}")
            return UploadFailed(reason=reason, error=e)
        finally:
            if uploader is not None:
                await uploader.close()
            if byte_source is not None:
                await byte_source.close()
