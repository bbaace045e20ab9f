"""Signed URLs and resumable upload sessions."""
from .models import SignedUrl, UploadSession, strip_query
from .service import SignatureService, infer_filename, split_path

__all__ = [
    'SignatureService',
    'SignedUrl',
    'UploadSession',
    'infer_filename',
    'split_path',
    'strip_query',
]
