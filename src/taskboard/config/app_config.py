"""
Service configuration.

Environment Variables:
    TASKBOARD_HOST: Bind host (default: '0.0.0.0')
    TASKBOARD_PORT: Bind port (default: 8080)
    TASKS_STORE_BACKEND: 'memory' or 'json' (default: 'json')
    TASKS_STORE_PATH: JSON snapshot file used by the 'json' backend (default: 'task.json')
    CORS_ALLOW_ORIGINS: Comma-separated origins allowed by CORS (default: '*')
    LOG_LEVEL: Logging level (default: 'INFO')
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Tuple

StoreBackend = Literal["memory", "json"]
_BACKENDS = ("memory", "json")


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the task API process."""

    host: str = "0.0.0.0"
    port: int = 8080
    store_backend: StoreBackend = "json"
    store_path: str = "task.json"
    cors_allow_origins: Tuple[str, ...] = field(default_factory=lambda: ("*",))
    log_level: str = "INFO"

    def __post_init__(self):
        if self.store_backend not in _BACKENDS:
            raise ValueError(
                f"Unknown task store backend {self.store_backend!r}; expected one of {', '.join(_BACKENDS)}"
            )

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            host=os.getenv("TASKBOARD_HOST", "0.0.0.0"),
            port=int(os.getenv("TASKBOARD_PORT", "8080")),
            store_backend=os.getenv("TASKS_STORE_BACKEND", "json").strip().lower(),
            store_path=os.getenv("TASKS_STORE_PATH", "task.json"),
            cors_allow_origins=_split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
