from fastapi import FastAPI

from ...repository import TaskRepository
from .tasks_router import TaskHandler, build_tasks_router
from .health_router import router as health_router


def include_all(app: FastAPI, repo: TaskRepository) -> None:
    app.include_router(build_tasks_router(TaskHandler(repo)), tags=["Tasks"])
    app.include_router(health_router)
