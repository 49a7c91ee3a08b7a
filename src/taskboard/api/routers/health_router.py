from fastapi import APIRouter

from ...telemetry.metrics import create_metrics_response

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "taskboard-api", "version": "1.0.0"}


@router.get("/metrics", include_in_schema=False)
async def get_metrics():
    """Get Prometheus metrics."""
    return create_metrics_response()
