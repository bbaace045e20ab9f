"""
File validation and byte source services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Optional, Union
import logging
import aiofiles


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        file_size = path.stat().st_size

        return path, file_size

    def validate_size(self, file_size: int, max_size: Optional[int] = None) -> None:
        """
        Validate file size.

        Args:
            file_size: File size in bytes
            max_size: Optional maximum allowed size

        Raises:
            ValueError: If file is empty or exceeds max size
        """
        if file_size == 0:
            raise ValueError("Cannot upload empty file")

        if max_size and file_size > max_size:
            raise ValueError(
                f"File size {file_size} exceeds maximum {max_size}"
            )


class FileSource:
    """
    Asynchronous file-backed byte source.

    Uses aiofiles for non-blocking I/O. The handle is opened lazily on the
    first read and kept open until close().
    """

    def __init__(self, path: Path, size: int):
        self._path = path
        self._size = size
        self._logger = logging.getLogger('ittypy.upload.file')
        self._file_handle = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def name(self) -> Optional[str]:
        return self._path.name

    @property
    def path(self) -> Path:
        return self._path

    async def read_range(self, start: int, end: int) -> bytes:
        """
        Read bytes [start, end) from the file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file is shorter than expected
        """
        if self._file_handle is None:
            self._file_handle = await aiofiles.open(self._path, 'rb')

        await self._file_handle.seek(start)
        data = await self._file_handle.read(end - start)

        if len(data) != end - start:
            raise ValueError(
                f"Short read at {start}-{end}: got {len(data)} bytes, file changed during upload?"
            )

        self._logger.debug(f"Read chunk: {start}-{end} ({len(data)} bytes)")
        return data

    async def close(self) -> None:
        """Close the file handle if open."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None


class MemorySource:
    """In-memory byte source."""

    def __init__(self, data: bytes, name: Optional[str] = None):
        self._data = bytes(data)
        self._name = name

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def name(self) -> Optional[str]:
        return self._name

    async def read_range(self, start: int, end: int) -> bytes:
        return self._data[start:end]

    async def close(self) -> None:
        pass


def open_source(
    source: Union[str, Path, bytes, bytearray, FileSource, MemorySource],
    validator: Optional[FileValidator] = None
):
    """
    Build a byte source from a path, raw bytes, or an existing source.

    Raises:
        FileNotFoundError: If a path does not exist
        ValueError: If the source is empty or not a regular file
    """
    validator = validator or FileValidator()

    if isinstance(source, (str, Path)):
        path, size = validator.validate(source)
        validator.validate_size(size)
        return FileSource(path, size)

    if isinstance(source, (bytes, bytearray)):
        validator.validate_size(len(source))
        return MemorySource(source)

    validator.validate_size(source.size)
    return source
