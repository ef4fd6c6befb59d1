"""
Cluster Analysis Endpoints Router

Provides:
- Cluster summaries computed at startup
- Cluster summaries recomputed over a filtered customer set
- Marketing strategies per cluster
- Reference model-performance curves (elbow / silhouette)
"""

from typing import List

from fastapi import APIRouter, Depends

from mall_segmentation.api.dependencies import customer_filters, get_store
from mall_segmentation.middleware.error_handling import APIError
from mall_segmentation.middleware.logging_config import get_logger
from mall_segmentation.models.customer import ClusterSummary, MarketingStrategy, ModelPerformance
from mall_segmentation.models.filters import CustomerFilters
from mall_segmentation.store.memory_store import CustomerStore

logger = get_logger(__name__)

router = APIRouter(tags=["clusters"])


@router.get("/clusters", response_model=List[ClusterSummary])
async def get_cluster_analysis(store: CustomerStore = Depends(get_store)):
    """Get per-cluster statistics and display metadata."""
    try:
        return store.cluster_summaries()
    except Exception as e:
        logger.error("cluster_analysis_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch cluster analysis") from e


@router.get("/clusters/filtered", response_model=List[ClusterSummary])
async def get_filtered_cluster_analysis(
    filters: CustomerFilters = Depends(customer_filters),
    store: CustomerStore = Depends(get_store),
):
    """
    Recompute cluster statistics over the customers matching the filters.

    Clusters with no matching customers are omitted.
    """
    try:
        return store.summarize(filters)
    except Exception as e:
        logger.error("filtered_cluster_analysis_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch cluster analysis") from e


@router.get("/marketing-strategies", response_model=List[MarketingStrategy])
async def get_marketing_strategies(store: CustomerStore = Depends(get_store)):
    """Get recommended marketing strategies for each known cluster."""
    return store.marketing_strategies()


@router.get("/model-performance", response_model=ModelPerformance)
async def get_model_performance(store: CustomerStore = Depends(get_store)):
    """Get the elbow (SSE) and silhouette reference curves by cluster count."""
    try:
        return store.model_performance()
    except Exception as e:
        logger.error("model_performance_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch model performance data") from e
