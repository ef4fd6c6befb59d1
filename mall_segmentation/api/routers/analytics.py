"""
Analytics & Aggregation Endpoints Router

Provides:
- Summary statistics (customer count, average income/spending, cluster count)
- CSV download of the customer dataset, optionally filtered
"""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from mall_segmentation.api.dependencies import customer_filters, get_store
from mall_segmentation.exports.csv_export import CSV_FILENAME, iter_customers_csv
from mall_segmentation.middleware.error_handling import APIError
from mall_segmentation.middleware.logging_config import get_logger
from mall_segmentation.middleware.metrics import track_csv_export
from mall_segmentation.models.customer import SummaryStats
from mall_segmentation.models.filters import CustomerFilters
from mall_segmentation.store.memory_store import CustomerStore

logger = get_logger(__name__)

router = APIRouter(tags=["analytics"])


@router.get("/summary", response_model=SummaryStats)
async def get_summary(store: CustomerStore = Depends(get_store)):
    """
    Get aggregate totals.

    Averages are rounded to one decimal; an empty store reports 0.0.
    """
    try:
        return store.summary()
    except Exception as e:
        logger.error("summary_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch summary statistics") from e


@router.get("/download-csv")
async def download_csv(
    filters: CustomerFilters = Depends(customer_filters),
    store: CustomerStore = Depends(get_store),
):
    """
    Download the customer dataset as CSV.

    Accepts the same optional filters as /customers/filtered; without
    filters the full dataset is exported.
    """
    try:
        customers = store.filter_customers(filters)
        chunks = list(iter_customers_csv(customers))
    except Exception as e:
        logger.error("csv_export_failed", error=str(e), exc_info=True)
        raise APIError("Failed to download CSV file") from e

    track_csv_export(filtered=not filters.is_empty)
    logger.info("csv_exported", row_count=len(customers), filtered=not filters.is_empty)

    return StreamingResponse(
        iter(chunks),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )
