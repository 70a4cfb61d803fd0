"""Task registry - create, list and complete tasks."""

from __future__ import annotations

import abc
import logging
import time
from typing import Callable, List, Optional

from fastapi import status

from ..models.task import Task, TaskCreate

logger = logging.getLogger(__name__)

# Fields the registry owns; caller-supplied values for these are dropped.
RESERVED_FIELDS = {"id", "completed"}


class TaskNotFoundError(Exception):
    """Raised when a task id does not exist."""

    def __init__(self, task_id: object):
        self.error = "task_not_found"
        self.message = "Task not found"
        self.status_code = status.HTTP_404_NOT_FOUND
        self.detail = {"task_id": str(task_id)}
        super().__init__(self.message)


class TaskStore(abc.ABC):
    """Storage strategy for task records."""

    @abc.abstractmethod
    def add(self, task: Task) -> Task:
        pass

    @abc.abstractmethod
    def get(self, task_id: int) -> Optional[Task]:
        pass

    @abc.abstractmethod
    def list(self) -> List[Task]:
        pass


class InMemoryTaskStore(TaskStore):
    """Process-lifetime list of tasks, kept in creation order."""

    def __init__(self) -> None:
        self._tasks: List[Task] = []

    def add(self, task: Task) -> Task:
        self._tasks.append(task)
        return task

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def list(self) -> List[Task]:
        return list(self._tasks)


def _now_millis() -> int:
    return int(time.time() * 1000)


class TaskRegistry:
    """Service for task operations.

    Tasks are a single global list; the caller's identity gates access but
    does not scope which tasks are visible.
    """

    def __init__(
        self,
        store: TaskStore | None = None,
        clock: Callable[[], int] = _now_millis,
    ) -> None:
        self._store = store or InMemoryTaskStore()
        self._clock = clock
        self._last_id = 0

    def _next_id(self) -> int:
        # Millisecond clock, bumped past the previous id so ids stay strictly increasing.
        candidate = self._clock()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def create(self, username: str, payload: TaskCreate) -> Task:
        extras = {
            key: value
            for key, value in payload.extra_fields().items()
            if key not in RESERVED_FIELDS
        }
        task = Task(id=self._next_id(), title=payload.title, completed=False, **extras)
        self._store.add(task)
        logger.info(f"Task {task.id} created by {username!r}")
        return task

    def list_all(self, username: str | None = None) -> List[Task]:
        return self._store.list()

    def mark_complete(self, task_id: int) -> Task:
        task = self._store.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        task.completed = True
        logger.info(f"Task {task_id} marked complete")
        return task


# Singleton instance for dependency injection
_task_registry: TaskRegistry | None = None


def get_task_registry() -> TaskRegistry:
    """Get or create the task registry singleton."""
    global _task_registry
    if _task_registry is None:
        _task_registry = TaskRegistry()
    return _task_registry


__all__ = [
    "TaskRegistry",
    "TaskStore",
    "InMemoryTaskStore",
    "TaskNotFoundError",
    "get_task_registry",
]
