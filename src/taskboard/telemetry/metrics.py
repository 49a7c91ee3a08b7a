"""
Prometheus metrics for the task API and the JSON snapshot store.
"""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST  # pyright: ignore[reportMissingImports]
from fastapi import Response  # pyright: ignore[reportMissingImports]

TASK_OPERATIONS = Counter(
    "taskboard_task_operations_total",
    "Task API operations by outcome",
    ["operation", "outcome"],
)
TASK_OPERATION_LATENCY = Histogram(
    "taskboard_task_operation_latency_seconds",
    "Task API operation latency in seconds",
    ["operation"],
)
STORE_PERSIST_FAILURES = Counter(
    "taskboard_store_persist_failures_total",
    "Failed writes of the JSON task snapshot",
)


def create_metrics_response() -> Response:
    """Create FastAPI response with Prometheus metrics."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
