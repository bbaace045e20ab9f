"""
Data models for files and tasks.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

FAILED_STATUSES = frozenset({'failed', 'error', 'cancelled'})


@dataclass(frozen=True)
class MediaFile:
    """
    A stored media file.

    Attributes:
        id: File id ('file_...')
        url: Playable URL
        filename: File name (if known)
        folder: Folder (if known)
        status: Processing status (if known)
        raw: Unwrapped payload
    """
    id: str
    url: str
    filename: Optional[str] = None
    folder: Optional[str] = None
    status: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def is_file_payload(data: Any) -> bool:
        """True when data looks like a file object: 'file_' id plus url."""
        return (
            isinstance(data, dict)
            and str(data.get('id') or '').startswith('file_')
            and bool(data.get('url'))
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaFile':
        return cls(
            id=str(data['id']),
            url=data['url'],
            filename=data.get('filename'),
            folder=data.get('folder'),
            status=data.get('status'),
            raw=data
        )


@dataclass(frozen=True)
class Task:
    """
    An upstream task (e.g. ingest).

    Attributes:
        id: Task id
        status: Task status string
        output: Task output payload, if any
        raw: Unwrapped payload
    """
    id: str
    status: Optional[str] = None
    output: Any = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> 'Task':
        data = data if isinstance(data, dict) else {}
        return cls(
            id=str(data.get('id') or ''),
            status=data.get('status'),
            output=data.get('output'),
            raw=data
        )

    @property
    def output_file(self) -> Optional[MediaFile]:
        """Returns the produced file once the task has one."""
        if MediaFile.is_file_payload(self.output):
            return MediaFile.from_dict(self.output)
        return None

    @property
    def has_failed(self) -> bool:
        return str(self.status) in FAILED_STATUSES


@dataclass(frozen=True)
class TaskStatus:
    """Result of a single task lookup."""
    done: bool
    task: Task
    file: Optional[MediaFile] = None


@dataclass(frozen=True)
class TaskCompleted:
    """The task (or direct import) produced a file."""
    file: MediaFile


@dataclass(frozen=True)
class TaskFailed:
    """The task reported a failed status."""
    task: Task

    @property
    def reason(self) -> str:
        return f"Ingest failed (status: {self.task.status})"


@dataclass(frozen=True)
class TaskTimedOut:
    """Polling limits were reached before the task finished."""
    task: Task
    attempts: int

    @property
    def reason(self) -> str:
        return "Still processing. Try again shortly."


TaskOutcome = Union[TaskCompleted, TaskFailed, TaskTimedOut]
