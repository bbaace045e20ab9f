"""
Task lookup and polling.
"""
import asyncio
from typing import Awaitable, Callable, Optional

from .models import (
    Task,
    TaskCompleted,
    TaskFailed,
    TaskOutcome,
    TaskStatus,
    TaskTimedOut,
)
from ..api import AsyncAPIClient, PollConfig
from ..logging import get_logger

logger = get_logger('ittypy.tasks')


class TaskService:
    """Reads task state from the API."""

    def __init__(self, api: AsyncAPIClient):
        self._api = api

    async def get_task(self, task_id: str) -> Task:
        """
        Fetch a task.

        Raises:
            ValueError: If task_id is empty
            ConfigurationError: If the API key is missing
            UpstreamError: If the lookup fails
        """
        if not task_id:
            raise ValueError("Missing id")
        response = await self._api.request(
            'GET', f"tasks/{task_id}", fallback_message="Upstream error"
        )
        return Task.from_dict(response.data)

    async def status(self, task_id: str) -> TaskStatus:
        """Fetch a task and report whether it produced a file."""
        task = await self.get_task(task_id)
        file = task.output_file
        return TaskStatus(done=file is not None, task=task, file=file)


class TaskPoller:
    """
    Polls a task until it produces a file, fails, or runs out of budget.

    Limits come from PollConfig: at most max_attempts fetches, at most
    total_budget seconds, poll_interval seconds between fetches.
    """

    def __init__(
        self,
        tasks: TaskService,
        config: Optional[PollConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Optional[Callable[[], float]] = None
    ):
        self._tasks = tasks
        self._config = config or PollConfig()
        self._sleep = sleep
        self._clock = clock

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    async def poll(self, task: Task) -> TaskOutcome:
        """
        Poll until a terminal outcome.

        Args:
            task: Task as returned when it was created

        Returns:
            TaskCompleted, TaskFailed or TaskTimedOut

        Raises:
            UpstreamError: If a lookup fails
        """
        config = self._config
        started = self._now()
        last = task
        attempts = 0

        while attempts < config.max_attempts and self._now() - started < config.total_budget:
            last = await self._tasks.get_task(task.id)
            attempts += 1

            file = last.output_file
            if file is not None:
                logger.info(f"Task {task.id} produced {file.id} after {attempts} attempts")
                return TaskCompleted(file=file)

            if last.has_failed:
                logger.warning(f"Task {task.id} failed with status {last.status}")
                return TaskFailed(task=last)

            logger.debug(f"Task {task.id} pending ({last.status}), attempt {attempts}")
            if attempts < config.max_attempts:
                await self._sleep(config.poll_interval)

        logger.info(f"Task {task.id} still pending after {attempts} attempts")
        return TaskTimedOut(task=last, attempts=attempts)
