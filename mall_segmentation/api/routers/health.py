"""
Health Check Endpoints Router

Provides health check endpoints for monitoring and load balancers.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mall_segmentation.api.dependencies import get_store
from mall_segmentation.middleware.error_handling import NotFoundError
from mall_segmentation.middleware.metrics import METRICS_ENABLED, metrics_endpoint
from mall_segmentation.store.memory_store import CustomerStore

router = APIRouter(
    tags=["health"],
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check():
    """Returns 200 if service is running."""
    return {"status": "healthy", "timestamp": _now()}


@router.get("/health/ready")
async def readiness_probe(store: CustomerStore = Depends(get_store)):
    """
    Readiness probe.

    Ready once the store holds customers; 503 otherwise. Datasets without
    cluster assignments (the raw Kaggle file) are ready with zero clusters.
    """
    customer_count = len(store)
    cluster_count = len(store.cluster_summaries())
    ready = customer_count > 0

    body = {
        "status": "ready" if ready else "not_ready",
        "customers": customer_count,
        "clusters": cluster_count,
        "timestamp": _now(),
    }
    return JSONResponse(status_code=200 if ready else 503, content=body)


@router.get("/health/live")
async def liveness_probe():
    return {"status": "alive"}


@router.get("/metrics")
async def prometheus_metrics():
    """Prometheus metrics (only if ENABLE_PROMETHEUS_METRICS=true)."""
    if not METRICS_ENABLED:
        raise NotFoundError(resource="Metrics", hint="Set ENABLE_PROMETHEUS_METRICS=true to enable")
    return await metrics_endpoint()
