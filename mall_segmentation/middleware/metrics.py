"""
Prometheus Metrics for the Segmentation API

OPTIONAL: Enable with environment variable ENABLE_PROMETHEUS_METRICS=true

Tracks:
- Request duration by endpoint
- Request count by status code
- Customers loaded in the store
- Filter queries and CSV exports
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Gauge, Histogram, CONTENT_TYPE_LATEST, generate_latest

from mall_segmentation.core.config import get_settings
from mall_segmentation.middleware.logging_config import get_logger

logger = get_logger(__name__)

METRICS_ENABLED = get_settings().enable_prometheus_metrics

# ==================== Metrics Definitions ====================

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

customers_loaded_total = Gauge(
    'customers_loaded_total',
    'Number of customers held in the store'
)

customer_filter_queries_total = Counter(
    'customer_filter_queries_total',
    'Filtered customer queries by criteria used',
    ['age_group', 'gender', 'cluster']
)

csv_exports_total = Counter(
    'csv_exports_total',
    'CSV exports served',
    ['filtered']
)


# ==================== Middleware ====================

async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    """Record request count and duration. No-op if metrics disabled."""
    if not METRICS_ENABLED or request.url.path == "/metrics":
        return await call_next(request)

    method = request.method
    endpoint = request.url.path
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception:
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=500).inc()
        raise
    else:
        http_requests_total.labels(
            method=method, endpoint=endpoint, status_code=response.status_code
        ).inc()
        return response
    finally:
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
            time.time() - start_time
        )


# ==================== Helper Functions ====================

def update_data_metrics(customers: int):
    """Update store size gauge. No-op if metrics disabled."""
    if not METRICS_ENABLED:
        return
    customers_loaded_total.set(customers)


def track_filter_query(age_group: bool, gender: bool, cluster: bool):
    """Count a filtered query by which criteria were set. No-op if metrics disabled."""
    if not METRICS_ENABLED:
        return
    customer_filter_queries_total.labels(
        age_group=str(age_group).lower(),
        gender=str(gender).lower(),
        cluster=str(cluster).lower(),
    ).inc()


def track_csv_export(filtered: bool):
    """Count a CSV export. No-op if metrics disabled."""
    if not METRICS_ENABLED:
        return
    csv_exports_total.labels(filtered=str(filtered).lower()).inc()


# ==================== Metrics Endpoint ====================

async def metrics_endpoint() -> Response:
    """Return metrics in Prometheus exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
