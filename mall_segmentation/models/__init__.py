"""
Data models for the segmentation API.
"""
from .customer import (
    ClusterSummary,
    Customer,
    CustomerCreate,
    ElbowPoint,
    Gender,
    MarketingStrategy,
    ModelPerformance,
    SilhouettePoint,
    SummaryStats,
)
from .filters import AgeGroup, CustomerFilters, parse_filters

__all__ = [
    "AgeGroup",
    "ClusterSummary",
    "Customer",
    "CustomerCreate",
    "CustomerFilters",
    "ElbowPoint",
    "Gender",
    "MarketingStrategy",
    "ModelPerformance",
    "SilhouettePoint",
    "SummaryStats",
    "parse_filters",
]
