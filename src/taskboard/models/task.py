from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator  # pyright: ignore[reportMissingImports]


class TaskStatus(str, enum.Enum):
    """Kanban column a task belongs to.

    The values are the wire representation used by the frontend and the
    JSON snapshot file, so they must not be renamed.
    """

    TODO = "A Fazer"
    IN_PROGRESS = "Em Progresso"
    DONE = "Concluído"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TaskStatus"]:
        """Return the matching status, or None when `value` is not one of them."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


LEGACY_DATE_FORMAT = "%d/%m/%Y"


def _new_task_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """A stored task as returned by the API and written to the snapshot file."""

    id: str = Field(default_factory=_new_task_id)
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_legacy_created_at(cls, v):
        # Older snapshot files stored the creation day only, as DD/MM/YYYY
        if isinstance(v, str) and len(v) == 10 and v[2] == "/" and v[5] == "/":
            return datetime.strptime(v, LEGACY_DATE_FORMAT).replace(tzinfo=timezone.utc)
        return v

    @field_validator("created_at")
    @classmethod
    def ensure_aware_created_at(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class TaskPayload(BaseModel):
    """Client supplied body for POST /tasks and PUT /tasks/{id}.

    `id` and `created_at` are owned by the server; any such keys in the
    request are dropped with the rest of the unknown fields.
    """

    title: str = ""
    description: Optional[str] = ""
    status: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("description", mode="before")
    @classmethod
    def default_empty_description(cls, v):
        return "" if v is None else v
