"""
In-memory task repository.

One dict, one reader/writer lock. Tasks are immutable pydantic models, so the
objects handed back to callers can be shared with the mapping safely.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..errors import InvalidStatusError, TaskNotFoundError
from ..models import Task, TaskPayload, TaskStatus
from ..utils.rwlock import ReadWriteLock
from .base import TaskRepository

logger = logging.getLogger(__name__)


def _status_for_create(raw: Optional[str]) -> TaskStatus:
    if not raw:
        return TaskStatus.TODO
    status = TaskStatus.parse(raw)
    if status is None:
        raise InvalidStatusError(raw)
    return status


def _status_for_update(raw: Optional[str]) -> TaskStatus:
    status = TaskStatus.parse(raw)
    if status is None:
        raise InvalidStatusError(raw)
    return status


class InMemoryTaskRepository(TaskRepository):
    def __init__(self, tasks: Optional[Dict[str, Task]] = None) -> None:
        self._lock = ReadWriteLock()
        self._tasks: Dict[str, Task] = dict(tasks or {})

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._tasks)

    def create_task(self, payload: TaskPayload) -> Task:
        status = _status_for_create(payload.status)
        with self._lock.write_locked():
            task = Task(
                title=payload.title,
                description=payload.description or "",
                status=status,
            )
            # uuid4 collision: regenerate, never overwrite
            while task.id in self._tasks:
                task = Task(title=task.title, description=task.description, status=task.status)
            self._tasks[task.id] = task
            snapshot = self._snapshot_locked()
        self._persist(snapshot)
        logger.info("Task %s created (status=%s)", task.id, task.status.value)
        return task

    def get_all_tasks(self) -> List[Task]:
        with self._lock.read_locked():
            return list(self._tasks.values())

    def get_task_by_id(self, task_id: str) -> Task:
        with self._lock.read_locked():
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: str, payload: TaskPayload) -> Task:
        with self._lock.write_locked():
            existing = self._tasks.get(task_id)
            if existing is None:
                raise TaskNotFoundError(task_id)
            status = _status_for_update(payload.status)
            updated = existing.model_copy(
                update={
                    "title": payload.title,
                    "description": payload.description or "",
                    "status": status,
                }
            )
            self._tasks[task_id] = updated
            snapshot = self._snapshot_locked()
        self._persist(snapshot)
        logger.info("Task %s updated (status=%s)", task_id, updated.status.value)
        return updated

    def delete_task(self, task_id: str) -> None:
        with self._lock.write_locked():
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            del self._tasks[task_id]
            snapshot = self._snapshot_locked()
        self._persist(snapshot)
        logger.info("Task %s deleted", task_id)

    # Persistence hooks, overridden by JsonFileTaskRepository.

    def _snapshot_locked(self) -> Any:
        """Called with the write lock held, after every successful mutation."""
        return None

    def _persist(self, snapshot: Any) -> None:
        """Called after the write lock is released with the _snapshot_locked() result."""
