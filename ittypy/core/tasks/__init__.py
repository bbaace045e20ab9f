"""Task lookup, polling and URL ingest."""
from .models import (
    MediaFile,
    Task,
    TaskStatus,
    TaskCompleted,
    TaskFailed,
    TaskTimedOut,
    TaskOutcome,
)
from .poller import TaskService, TaskPoller
from .ingest import IngestService

__all__ = [
    'MediaFile',
    'Task',
    'TaskStatus',
    'TaskCompleted',
    'TaskFailed',
    'TaskTimedOut',
    'TaskOutcome',
    'TaskService',
    'TaskPoller',
    'IngestService',
]
