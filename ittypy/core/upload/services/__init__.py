"""Upload services module."""
from .file_service import FileValidator, FileSource, MemorySource, open_source
from .chunk_service import ChunkUploader, ChunkResponse

__all__ = [
    'FileValidator',
    'FileSource',
    'MemorySource',
    'open_source',
    'ChunkUploader',
    'ChunkResponse',
]
