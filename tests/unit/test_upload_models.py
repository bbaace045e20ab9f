"""Tests for upload models."""
import pytest
from ittypy.core.upload.models import (
    ChunkTransfer,
    UploadComplete,
    UploadConfig,
    UploadProgress,
)


class TestChunkTransfer:
    """Test suite for ChunkTransfer."""

    def test_size_and_end(self):
        transfer = ChunkTransfer(index=0, range_start=0, range_end=99, total_size=250)

        assert transfer.size == 100
        assert transfer.end == 100
        assert not transfer.is_final

    def test_final_chunk(self):
        transfer = ChunkTransfer(index=2, range_start=200, range_end=249, total_size=250)

        assert transfer.is_final
        assert transfer.content_range == "bytes=200-249/250"

    def test_frozen(self):
        transfer = ChunkTransfer(index=0, range_start=0, range_end=1, total_size=2)
        with pytest.raises(Exception):
            transfer.range_start = 5


class TestUploadProgress:
    """Test suite for UploadProgress."""

    def test_starts_at_zero(self):
        assert UploadProgress(total_bytes=100).percent == 0

    def test_rounds_half_up(self):
        progress = UploadProgress(total_bytes=200, uploaded_bytes=1)
        assert progress.percent == 1  # 0.5% rounds up

    def test_stays_below_100_until_completed(self):
        progress = UploadProgress(total_bytes=1000, uploaded_bytes=999)
        assert progress.percent == 99
        assert not progress.is_complete

        progress.uploaded_bytes = 1000
        assert progress.percent == 99

        progress.completed = True
        assert progress.percent == 100
        assert progress.is_complete

    def test_zero_total(self):
        assert UploadProgress(total_bytes=0).percent == 0


class TestUploadConfig:
    """Test suite for UploadConfig."""

    def test_defaults(self):
        config = UploadConfig()
        assert config.chunk_size == 16 * 1024 * 1024
        assert config.cancel_event is None

    def test_rejects_bad_chunk_size(self):
        with pytest.raises(ValueError):
            UploadConfig(chunk_size=0)


def test_upload_complete_reports_full_progress():
    assert UploadComplete(url="https://cdn/x.mp4").percent == 100
