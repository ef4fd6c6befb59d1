"""
Customer and cluster models.

Wire format is camelCase (``customerId``, ``annualIncome``...) to match the
dashboard client; attributes are snake_case in Python.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class CustomerCreate(CamelModel):
    """Request body for creating a customer."""

    customer_id: int = Field(..., gt=0, description="External reference number")
    gender: Gender
    age: int = Field(..., gt=0)
    annual_income: float = Field(..., ge=0, description="Annual income in thousands")
    spending_score: float = Field(..., ge=0, le=100)
    cluster: Optional[int] = None


class Customer(CustomerCreate):
    """A stored customer record. ``id`` is assigned by the store."""

    model_config = ConfigDict(frozen=True)

    id: int


class ClusterSummary(CamelModel):
    """Aggregate statistics and display metadata for one cluster."""

    id: int
    cluster: int
    avg_age: float
    avg_income: float
    avg_spending: float
    size: int
    color: str
    label: str
    description: str


class ElbowPoint(CamelModel):
    k: int
    sse: float


class SilhouettePoint(CamelModel):
    k: int
    score: float


class ModelPerformance(CamelModel):
    """Reference clustering-quality curves by cluster count."""

    elbow_data: List[ElbowPoint]
    silhouette_data: List[SilhouettePoint]


class SummaryStats(CamelModel):
    total_customers: int
    avg_income: float
    avg_spending: float
    total_clusters: int


class MarketingStrategy(CamelModel):
    cluster: int
    title: str
    description: str
    strategies: List[str]
