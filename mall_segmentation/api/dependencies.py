"""
API Dependencies

Shared dependencies for FastAPI endpoints: store and settings access,
filter parsing and API key authentication.
"""
import secrets
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import APIKeyHeader

from mall_segmentation.core.config import Settings
from mall_segmentation.core.exceptions import InvalidFilterError
from mall_segmentation.middleware.error_handling import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from mall_segmentation.middleware.logging_config import get_logger
from mall_segmentation.models.filters import CustomerFilters, parse_filters
from mall_segmentation.store.memory_store import CustomerStore

logger = get_logger(__name__)

# API Key header scheme
api_key_header_scheme = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_store(request: Request) -> CustomerStore:
    """The CustomerStore built at application startup."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def customer_filters(
    age_group: Optional[str] = Query(None, alias="ageGroup", description="18-30, 31-45, 46-60, 60+ or all"),
    gender: Optional[str] = Query(None, description="male, female or all (case-insensitive)"),
    cluster: Optional[str] = Query(None, description="Cluster id; -1 for all"),
) -> CustomerFilters:
    """
    Parse the optional ageGroup/gender/cluster query parameters.

    Raises:
        ValidationError: 400 if any parameter is malformed
    """
    try:
        return parse_filters(age_group=age_group, gender=gender, cluster=cluster)
    except InvalidFilterError as e:
        logger.warning("invalid_filters", field=e.field, error=e.message)
        raise ValidationError("Invalid filters", field=e.field) from e


async def require_api_key(
    api_key: Optional[str] = Depends(api_key_header_scheme),
    settings: Settings = Depends(get_app_settings),
):
    """
    Dependency that requires valid API key authentication.

    When no API_KEY is configured, authentication is disabled and requests
    pass through.

    Raises:
        AuthenticationError: 401 if the X-API-Key header is missing
        AuthorizationError: 403 if the key does not match
    """
    expected_key = settings.api_key

    if not expected_key:
        logger.debug("no_api_key_configured")
        return None

    if not api_key:
        raise AuthenticationError("Missing API key. Provide X-API-Key header.")

    if not secrets.compare_digest(api_key.encode(), expected_key.encode()):
        logger.warning("invalid_api_key_attempted", key_prefix=api_key[:4])
        raise AuthorizationError("Invalid API key")

    return {"authenticated": True}
