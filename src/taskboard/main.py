"""
Taskboard FastAPI application.

The repository is constructed by the caller and handed to `create_app`, so
tests and embedders can run several independent apps side by side. From the
command line:

    taskboard                                  # console script, see run()
    uvicorn taskboard.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request  # pyright: ignore[reportMissingImports]
from fastapi.exceptions import RequestValidationError  # pyright: ignore[reportMissingImports]
from fastapi.middleware.cors import CORSMiddleware  # pyright: ignore[reportMissingImports]
from fastapi.responses import JSONResponse  # pyright: ignore[reportMissingImports]
from starlette.exceptions import HTTPException as StarletteHTTPException  # pyright: ignore[reportMissingImports]

from .api.routers import include_all
from .config import AppConfig
from .logging_setup import setup_logging
from .repository import TaskRepository, build_repository

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return _error_response(400, "invalid payload json")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(500, "internal server error")


def create_app(repo: Optional[TaskRepository] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """Build the API around `repo`, or around the store selected by `config`."""
    config = config or AppConfig.from_env()
    if repo is None:
        repo = build_repository(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting Taskboard API with {type(repo).__name__}...")
        yield
        logger.info("Taskboard API shutdown complete")

    app = FastAPI(
        title="Taskboard API",
        description="Task tracking for the kanban board",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.task_repository = repo

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_allow_origins),
        allow_credentials="*" not in config.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    include_all(app, repo)
    return app


def run() -> None:
    config = AppConfig.from_env()
    setup_logging(config.log_level)

    import uvicorn  # pyright: ignore[reportMissingImports]

    app = create_app(config=config)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_config=None,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    run()
