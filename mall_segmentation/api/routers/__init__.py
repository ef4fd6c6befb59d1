"""
API Routers

Exports all routers for the FastAPI application.
"""
from .analytics import router as analytics_router
from .clusters import router as clusters_router
from .customers import router as customers_router
from .health import router as health_router

__all__ = [
    "analytics_router",
    "clusters_router",
    "customers_router",
    "health_router",
]
