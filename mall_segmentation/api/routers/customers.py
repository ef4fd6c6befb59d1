"""
Customer Endpoints Router

Provides:
- Full customer listing
- Filtered customer listing (age group, gender, cluster)
- Customer creation (API key enforced when configured)
"""

from typing import List

from fastapi import APIRouter, Depends, status

from mall_segmentation.api.dependencies import customer_filters, get_store, require_api_key
from mall_segmentation.core.exceptions import UnknownClusterError
from mall_segmentation.middleware.error_handling import APIError, ValidationError
from mall_segmentation.middleware.logging_config import get_logger, log_business_event
from mall_segmentation.middleware.metrics import track_filter_query, update_data_metrics
from mall_segmentation.models.customer import Customer, CustomerCreate
from mall_segmentation.models.filters import CustomerFilters
from mall_segmentation.store.memory_store import CustomerStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
)


@router.get("", response_model=List[Customer])
async def list_customers(store: CustomerStore = Depends(get_store)):
    """Get all customers."""
    try:
        return store.list_customers()
    except Exception as e:
        logger.error("list_customers_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch customers") from e


@router.get("/filtered", response_model=List[Customer])
async def list_filtered_customers(
    filters: CustomerFilters = Depends(customer_filters),
    store: CustomerStore = Depends(get_store),
):
    """
    Get customers matching every provided filter.

    Filters:
    - ageGroup: 18-30, 31-45, 46-60, 60+ or all
    - gender: male/female (case-insensitive) or all
    - cluster: cluster id, -1 for all

    Invalid filter values are rejected with 400.
    """
    track_filter_query(
        age_group=filters.age_group is not None,
        gender=filters.gender is not None,
        cluster=filters.cluster is not None,
    )
    try:
        customers = store.filter_customers(filters)
    except Exception as e:
        logger.error("filter_customers_failed", error=str(e), exc_info=True)
        raise APIError("Failed to fetch customers") from e

    logger.debug("customers_filtered", result_count=len(customers))
    return customers


@router.post(
    "",
    response_model=Customer,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
async def create_customer(
    payload: CustomerCreate,
    store: CustomerStore = Depends(get_store),
):
    """
    Create a customer. The id is assigned by the store; cluster defaults
    to null and, when given, must be a known cluster.
    """
    try:
        customer = store.create_customer(payload)
    except UnknownClusterError as e:
        raise ValidationError(e.message, field="cluster", cluster=e.cluster) from e

    update_data_metrics(customers=len(store))
    log_business_event("customer_created", id=customer.id, cluster=customer.cluster)
    return customer
