"""
ittypy - Async Python client for the ittybit media API.

Usage:
    >>> from ittypy import IttyClient
    >>>
    >>> async with IttyClient(api_key="sk_...") as itty:
    ...     outcome = await itty.upload_resumable("movie.mp4", folder="videos")
"""
import logging
from .client import IttyClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    PollConfig,
    AsyncAPIClient,
)

# Errors
from .core.exceptions import (
    IttyException,
    ConfigurationError,
    UpstreamError,
    ProtocolError,
    UpstreamChunkError,
    NetworkError,
    UploadCancelledError,
)

# Uploads
from .core.signatures import SignatureService, UploadSession, SignedUrl
from .core.upload import (
    UploadFacade,
    UploadCoordinator,
    UploadConfig,
    UploadComplete,
    UploadInProgress,
    UploadFailed,
    ChunkTransfer,
)

# Tasks
from .core.tasks import (
    MediaFile,
    Task,
    TaskCompleted,
    TaskFailed,
    TaskTimedOut,
)

__version__ = '0.1.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for ittypy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'ittypy',
        'ittypy.api',
        'ittypy.signatures',
        'ittypy.upload',
        'ittypy.upload.coordinator',
        'ittypy.upload.chunk',
        'ittypy.upload.file',
        'ittypy.tasks',
        'ittypy.ingest',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'IttyClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'PollConfig',
    'AsyncAPIClient',
    'IttyException',
    'ConfigurationError',
    'UpstreamError',
    'ProtocolError',
    'UpstreamChunkError',
    'NetworkError',
    'UploadCancelledError',
    'SignatureService',
    'UploadSession',
    'SignedUrl',
    'UploadFacade',
    'UploadCoordinator',
    'UploadConfig',
    'UploadComplete',
    'UploadInProgress',
    'UploadFailed',
    'ChunkTransfer',
    'MediaFile',
    'Task',
    'TaskCompleted',
    'TaskFailed',
    'TaskTimedOut',
    'setup_logging',
]
