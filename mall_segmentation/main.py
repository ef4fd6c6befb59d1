"""
Mall Customer Segmentation API

FastAPI application serving pre-computed K-Means segmentation results for
the mall customer dataset:
1. Customer listing, filtering and creation
2. Cluster summaries and marketing strategies
3. Model performance curves and summary statistics
4. CSV export

Run:
    uvicorn mall_segmentation.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from mall_segmentation import __version__
from mall_segmentation.api.routers import (
    analytics_router,
    clusters_router,
    customers_router,
    health_router,
)
from mall_segmentation.core.config import Settings, get_settings
from mall_segmentation.middleware.error_handling import register_exception_handlers
from mall_segmentation.middleware.logging_config import (
    configure_logging,
    correlation_id_middleware,
    get_logger,
)
from mall_segmentation.middleware.metrics import METRICS_ENABLED, metrics_middleware, update_data_metrics
from mall_segmentation.store.memory_store import CustomerStore

logger = get_logger(__name__)


def build_store(settings: Settings) -> CustomerStore:
    """Load customers from the configured CSV, or generate them from the seed."""
    if settings.dataset_csv_path:
        return CustomerStore.from_csv(settings.dataset_csv_path)
    return CustomerStore.from_seed(settings.data_seed)


# ==================== Application Lifespan ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    store: CustomerStore = app.state.store
    logger.info(
        "application_starting",
        version=__version__,
        environment=app.state.settings.environment,
        customer_count=len(store),
        cluster_count=len(store.cluster_summaries()),
    )

    if len(store) == 0:
        logger.warning("no_customer_data", impact="summary averages will be reported as 0.0")

    yield

    logger.info("application_stopped")


# ==================== FastAPI Application ====================

def create_app(settings: Optional[Settings] = None, store: Optional[CustomerStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (defaults to environment settings)
        store: Pre-built store; built from settings when omitted
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

    allowed_origins = settings.allowed_origins_list
    if settings.is_production and "*" in allowed_origins:
        raise ValueError("Wildcard CORS origins not allowed in production")

    app = FastAPI(
        title="Mall Customer Segmentation API",
        description="Customer segments, cluster statistics and model performance for the mall customer dataset.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "customers", "description": "Customer records and filtering"},
            {"name": "clusters", "description": "Cluster summaries, strategies and model performance"},
            {"name": "analytics", "description": "Summary statistics and CSV export"},
            {"name": "health", "description": "Health check and system status endpoints"},
        ],
    )

    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)
    update_data_metrics(customers=len(app.state.store))

    # ==================== Exception Handlers ====================
    register_exception_handlers(app)

    # ==================== Rate Limiting ====================
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # ==================== Middleware ====================
    if METRICS_ENABLED:
        app.middleware("http")(metrics_middleware)
    app.middleware("http")(correlation_id_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-API-Key", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID", "Content-Disposition"],
    )

    # ==================== Include Routers ====================
    app.include_router(health_router)
    app.include_router(customers_router, prefix=settings.api_prefix)
    app.include_router(clusters_router, prefix=settings.api_prefix)
    app.include_router(analytics_router, prefix=settings.api_prefix)

    logger.debug(
        "application_configured",
        api_prefix=settings.api_prefix,
        rate_limit=settings.rate_limit if settings.rate_limit_enabled else None,
        metrics_enabled=METRICS_ENABLED,
        cors_origins=allowed_origins,
    )

    return app


app = create_app()


# ==================== Run Application ====================

def run():
    settings = get_settings()
    uvicorn.run(
        "mall_segmentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.auto_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
