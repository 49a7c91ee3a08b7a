import logging
from contextlib import contextmanager
from time import perf_counter
from typing import Iterator, List

from fastapi import APIRouter, HTTPException, Response  # pyright: ignore[reportMissingImports]

from ...errors import InvalidStatusError, TaskNotFoundError
from ...models import Task, TaskPayload
from ...repository import TaskRepository
from ...telemetry.metrics import TASK_OPERATIONS, TASK_OPERATION_LATENCY

logger = logging.getLogger(__name__)


# --- Helpers ---
@contextmanager
def _observed(operation: str) -> Iterator[None]:
    """Count the outcome and latency of one repository call."""
    started = perf_counter()
    outcome = "ok"
    try:
        yield
    except HTTPException as exc:
        outcome = str(exc.status_code)
        raise
    finally:
        TASK_OPERATIONS.labels(operation, outcome).inc()
        TASK_OPERATION_LATENCY.labels(operation).observe(perf_counter() - started)


def _require_title(payload: TaskPayload) -> None:
    if not payload.title:
        raise HTTPException(400, "title is required")


class TaskHandler:
    """
    Binds a TaskRepository to the /tasks endpoints.

    The handler holds nothing but the repository; all task state lives there.
    Methods are plain `def` so FastAPI runs each request on its threadpool and
    the repository lock does the coordination.
    """

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    def create_task(self, payload: TaskPayload) -> Task:
        with _observed("create"):
            _require_title(payload)
            try:
                return self.repo.create_task(payload)
            except InvalidStatusError as e:
                raise HTTPException(400, str(e))
            except Exception:
                logger.exception("Failed to create task")
                raise HTTPException(500, "failed to create task")

    def list_tasks(self) -> List[Task]:
        with _observed("list"):
            try:
                return self.repo.get_all_tasks()
            except Exception:
                logger.exception("Failed to list tasks")
                raise HTTPException(500, "failed to retrieve tasks")

    def get_task(self, task_id: str) -> Task:
        with _observed("get"):
            try:
                return self.repo.get_task_by_id(task_id)
            except TaskNotFoundError as e:
                raise HTTPException(404, str(e))
            except Exception:
                logger.exception(f"Failed to fetch task {task_id}")
                raise HTTPException(500, "failed to retrieve task")

    def update_task(self, task_id: str, payload: TaskPayload) -> Task:
        with _observed("update"):
            _require_title(payload)
            try:
                return self.repo.update_task(task_id, payload)
            except TaskNotFoundError as e:
                raise HTTPException(404, str(e))
            except InvalidStatusError as e:
                raise HTTPException(400, str(e))
            except Exception:
                logger.exception(f"Failed to update task {task_id}")
                raise HTTPException(500, "failed to update task")

    def delete_task(self, task_id: str) -> Response:
        with _observed("delete"):
            try:
                self.repo.delete_task(task_id)
            except TaskNotFoundError as e:
                raise HTTPException(404, str(e))
            except Exception:
                logger.exception(f"Failed to delete task {task_id}")
                raise HTTPException(500, "failed to delete task")
        return Response(status_code=204)


def build_tasks_router(handler: TaskHandler) -> APIRouter:
    router = APIRouter()
    router.add_api_route("/tasks", handler.create_task, methods=["POST"], response_model=Task, status_code=201)
    router.add_api_route("/tasks", handler.list_tasks, methods=["GET"], response_model=List[Task])
    router.add_api_route("/tasks/{task_id}", handler.get_task, methods=["GET"], response_model=Task)
    router.add_api_route("/tasks/{task_id}", handler.update_task, methods=["PUT"], response_model=Task)
    router.add_api_route("/tasks/{task_id}", handler.delete_task, methods=["DELETE"], status_code=204, response_class=Response)
    return router
