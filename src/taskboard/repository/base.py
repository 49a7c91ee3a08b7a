from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models import Task, TaskPayload


class TaskRepository(ABC):
    """Storage interface the HTTP layer depends on."""

    @abstractmethod
    def create_task(self, payload: TaskPayload) -> Task:
        """Store a new task with a server generated id and timestamp."""

    @abstractmethod
    def get_all_tasks(self) -> List[Task]:
        """Return every stored task. Order is unspecified."""

    @abstractmethod
    def get_task_by_id(self, task_id: str) -> Task:
        """Return the task or raise TaskNotFoundError."""

    @abstractmethod
    def update_task(self, task_id: str, payload: TaskPayload) -> Task:
        """Replace title, description and status of an existing task."""

    @abstractmethod
    def delete_task(self, task_id: str) -> None:
        """Remove the task or raise TaskNotFoundError."""
