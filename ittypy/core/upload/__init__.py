"""
Upload module for media uploads.

Resumable uploads go through a signed session and fixed-size chunk PUTs;
small files can use a single signed PUT.
"""
from .facade import UploadFacade, describe_failure
from .coordinator import UploadCoordinator
from .models import (
    ChunkTransfer,
    UploadProgress,
    UploadComplete,
    UploadInProgress,
    UploadFailed,
    UploadOutcome,
    UploadConfig,
)
from .protocols import (
    ChunkingStrategy,
    ByteSource,
    ChunkUploaderProtocol,
    ProgressCallback,
)

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',
    'describe_failure',

    # Models
    'ChunkTransfer',
    'UploadProgress',
    'UploadComplete',
    'UploadInProgress',
    'UploadFailed',
    'UploadOutcome',
    'UploadConfig',

    # Protocols
    'ChunkingStrategy',
    'ByteSource',
    'ChunkUploaderProtocol',
    'ProgressCallback',
]
