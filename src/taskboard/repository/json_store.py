"""
JSON snapshot persistence for the in-memory repository.

The whole mapping is written as one JSON object keyed by task id after every
mutation, and read back once when the repository is constructed. The write
happens after the mapping lock is released; a separate file lock plus a
snapshot revision keep concurrent writers from putting an older snapshot on
disk after a newer one.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError  # pyright: ignore[reportMissingImports]

from ..errors import TaskStoreLoadError
from ..models import Task
from ..telemetry.metrics import STORE_PERSIST_FAILURES
from .memory import InMemoryTaskRepository

logger = logging.getLogger(__name__)

Snapshot = Tuple[int, Dict[str, Dict[str, Any]]]


def load_tasks(path: Path) -> Dict[str, Task]:
    """Read a snapshot file. A missing or blank file is an empty store."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise TaskStoreLoadError(f"Could not read tasks from {path}: {e}") from e

    if not text.strip():
        return {}

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise TaskStoreLoadError(f"Could not parse tasks from {path}: {e}") from e
    if not isinstance(raw, dict):
        raise TaskStoreLoadError(f"Expected a JSON object of tasks in {path}, got {type(raw).__name__}")

    tasks: Dict[str, Task] = {}
    for key, item in raw.items():
        if not isinstance(item, dict):
            raise TaskStoreLoadError(f"Task {key!r} in {path} is not a JSON object")
        if not item.get("id"):
            item = {**item, "id": key}
        try:
            task = Task.model_validate(item)
        except ValidationError as e:
            raise TaskStoreLoadError(f"Task {key!r} in {path} is invalid: {e}") from e
        tasks[task.id] = task
    return tasks


class JsonFileTaskRepository(InMemoryTaskRepository):
    """InMemoryTaskRepository that mirrors every mutation to a JSON file."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self.path = Path(path)
        super().__init__(load_tasks(self.path))
        self._file_lock = threading.Lock()
        self._revision = 0
        self._written_revision = 0
        logger.info("Loaded %d task(s) from %s", len(self._tasks), self.path)

    def _snapshot_locked(self) -> Snapshot:
        self._revision += 1
        data = {task_id: task.model_dump(mode="json") for task_id, task in self._tasks.items()}
        return self._revision, data

    def _persist(self, snapshot: Optional[Snapshot]) -> None:
        if snapshot is None:
            return
        revision, data = snapshot
        with self._file_lock:
            if revision <= self._written_revision:
                logger.debug("Skipping stale snapshot r%d (r%d already on disk)", revision, self._written_revision)
                return
            try:
                self._write(data)
            except (OSError, TypeError, ValueError) as e:
                STORE_PERSIST_FAILURES.inc()
                logger.error(f"Error saving tasks to {self.path}: {e}", exc_info=True)
                return
            self._written_revision = revision

    def _write(self, data: Dict[str, Dict[str, Any]]) -> None:
        # Atomic write: temp file in the same directory, then rename over the target
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=1, ensure_ascii=False)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
            raise
