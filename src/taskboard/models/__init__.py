"""
Task models for Taskboard.

`Task` is what the repository stores and the API returns; `TaskPayload` is
what clients send on create and update.
"""

from .task import Task, TaskPayload, TaskStatus

__all__ = ["Task", "TaskPayload", "TaskStatus"]
