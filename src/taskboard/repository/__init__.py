"""
Task storage backends.

    from taskboard.repository import build_repository, InMemoryTaskRepository
"""

from __future__ import annotations

import logging

from ..config import AppConfig
from .base import TaskRepository
from .json_store import JsonFileTaskRepository, load_tasks
from .memory import InMemoryTaskRepository

logger = logging.getLogger(__name__)


def build_repository(config: AppConfig) -> TaskRepository:
    """Construct the repository selected by `config.store_backend`."""
    if config.store_backend == "memory":
        logger.info("Using in-memory task store (no persistence)")
        return InMemoryTaskRepository()
    logger.info(f"Using JSON task store at {config.store_path}")
    return JsonFileTaskRepository(config.store_path)


__all__ = [
    "TaskRepository",
    "InMemoryTaskRepository",
    "JsonFileTaskRepository",
    "build_repository",
    "load_tasks",
]
