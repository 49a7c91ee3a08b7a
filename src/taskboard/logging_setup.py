from __future__ import annotations
import json
import logging
import os
from logging.config import dictConfig
from logging import Filter

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class HealthProbeAccessFilter(Filter):
    """
    Drop uvicorn access log lines for /health and /metrics.

    Container probes and Prometheus scrapes hit those paths every few seconds
    and would otherwise drown out the task API requests.
    """
    QUIET_PATHS = ("/health", "/metrics")

    def filter(self, record):
        args = record.args
        if record.name == "uvicorn.access" and isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            if path in self.QUIET_PATHS:
                return False
        return True


def _stdout_only(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "std": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"}
        },
        "filters": {
            "health_probe_access_filter": {
                "()": "taskboard.logging_setup.HealthProbeAccessFilter",
            }
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "std",
                "level": level,
                "filters": ["health_probe_access_filter"],
            }
        },
        # uvicorn installs its own handlers unless told otherwise; route them to root
        "loggers": {
            "uvicorn": {"handlers": [], "propagate": True},
            "uvicorn.error": {"handlers": [], "propagate": True},
            "uvicorn.access": {"handlers": [], "propagate": True},
        },
        "root": {"level": level, "handlers": ["stdout"]},
    }


def setup_logging(level: str | None = None, config_path_env: str = "TASKBOARD_LOGCFG") -> None:
    """
    Call this as the FIRST thing in your entrypoint.
    - If TASKBOARD_LOGCFG points to a JSON dictConfig file, we load it.
    - Otherwise we configure a single stdout handler on the root logger.
    """
    cfg_path = os.getenv(config_path_env, "").strip()
    if cfg_path and os.path.exists(cfg_path):
        with open(cfg_path, "r", encoding="utf-8") as f:
            dictConfig(json.load(f))
        return

    level = (level or DEFAULT_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    dictConfig(_stdout_only(level))
