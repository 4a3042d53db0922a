"""Background task management for StyleSync.

Runs workflow steps (style analysis after select/import) as asyncio
tasks on the current event loop, without blocking the caller.

Usage:
    from src.core.tasks import TaskManager

    manager = TaskManager()
    manager.submit("analyze:2", orchestrator.analyze, "2")
    ...
    await manager.drain()
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from src.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TaskResult:
    """Result of a background task.

    Attributes:
        task_name: Name of the task
        success: Whether task completed successfully
        result: Return value if successful
        error: Exception if failed
        started_at: When task started
        completed_at: When task finished
    """

    task_name: str
    success: bool
    result: Any = None
    error: Optional[Exception] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        """Calculate task duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None


class TaskManager:
    """Tracks background coroutines on the running event loop.

    Failures are logged and captured in a TaskResult, never raised
    into the event loop.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}
        self._pending: set[asyncio.Task] = set()
        self._results: dict[str, TaskResult] = {}

    def submit(
        self,
        task_name: str,
        func: Callable[..., Awaitable[Any]],
        *args,
        callback: Optional[Callable[[TaskResult], None]] = None,
        **kwargs,
    ) -> asyncio.Task:
        """Schedule a coroutine function for execution.

        Must be called while an event loop is running.

        Args:
            task_name: Name for tracking
            func: Coroutine function to execute
            *args: Positional arguments
            callback: Function to call with TaskResult when complete
            **kwargs: Keyword arguments

        Returns:
            The scheduled asyncio.Task (resolves to a TaskResult)
        """
        started_at = datetime.now()

        async def wrapper() -> TaskResult:
            try:
                result = await func(*args, **kwargs)
                task_result = TaskResult(
                    task_name=task_name,
                    success=True,
                    result=result,
                    started_at=started_at,
                    completed_at=datetime.now(),
                )
            except Exception as e:
                logger.error(f"Task {task_name} failed: {e}", exc_info=True)
                task_result = TaskResult(
                    task_name=task_name,
                    success=False,
                    error=e,
                    started_at=started_at,
                    completed_at=datetime.now(),
                )
            self._results[task_name] = task_result
            if callback:
                callback(task_result)
            return task_result

        task = asyncio.get_running_loop().create_task(wrapper(), name=task_name)
        self._tasks[task_name] = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug("Task scheduled", extra={"context": {"task": task_name}})
        return task

    def get(self, task_name: str) -> Optional[asyncio.Task]:
        """Most recently submitted task with this name, if any."""
        return self._tasks.get(task_name)

    def is_running(self, task_name: str) -> bool:
        """Check if the most recent task with this name is still running."""
        task = self._tasks.get(task_name)
        return task is not None and not task.done()

    def last_result(self, task_name: str) -> Optional[TaskResult]:
        """Result of the most recently finished task with this name."""
        return self._results.get(task_name)

    @property
    def pending_count(self) -> int:
        """Number of tasks not yet finished."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every scheduled task (including ones scheduled meanwhile) is done."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel outstanding tasks and wait for them to unwind."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(
                "Cancelled outstanding tasks", extra={"context": {"count": len(pending)}}
            )
        self._tasks.clear()
