"""Exceptions raised by the task repository and translated by the HTTP layer."""


class TaskboardError(Exception):
    """Base exception for all Taskboard failures."""


class TaskValidationError(TaskboardError):
    """Raised when task data is rejected before it reaches the store."""


class InvalidStatusError(TaskValidationError):
    """Raised when a status is not one of the TaskStatus values."""

    def __init__(self, status=None):
        self.status = status
        super().__init__("invalid task status")


class TaskNotFoundError(TaskboardError):
    """Raised when no task exists for the requested id."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("task not found")


class TaskStoreLoadError(TaskboardError):
    """Raised when the JSON snapshot exists but cannot be read back."""
