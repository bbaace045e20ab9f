"""Upload models."""
from .upload_models import (
    ChunkTransfer,
    UploadProgress,
    UploadComplete,
    UploadInProgress,
    UploadFailed,
    UploadOutcome,
    UploadConfig,
    DEFAULT_CHUNK_SIZE,
    MiB,
)

__all__ = [
    'ChunkTransfer',
    'UploadProgress',
    'UploadComplete',
    'UploadInProgress',
    'UploadFailed',
    'UploadOutcome',
    'UploadConfig',
    'DEFAULT_CHUNK_SIZE',
    'MiB',
]
