"""
In-memory customer store.

Holds the customer records and the cluster summaries computed at startup.
One instance is built when the application starts and handed to request
handlers through a FastAPI dependency.
"""

import statistics
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from mall_segmentation.core.exceptions import DatasetLoadError, UnknownClusterError
from mall_segmentation.exports.csv_export import read_customers_csv
from mall_segmentation.middleware.logging_config import get_logger
from mall_segmentation.models.customer import (
    ClusterSummary,
    Customer,
    CustomerCreate,
    MarketingStrategy,
    ModelPerformance,
    SummaryStats,
)
from mall_segmentation.models.filters import CustomerFilters
from mall_segmentation.segmentation.aggregation import round_one_decimal, summarize_clusters
from mall_segmentation.segmentation.catalog import marketing_strategies_for
from mall_segmentation.segmentation.generation import (
    DEFAULT_SEED,
    build_cluster_summaries,
    generate_customers,
)
from mall_segmentation.segmentation.model_performance import reference_model_performance

logger = get_logger(__name__)


def matches(customer: Customer, filters: CustomerFilters) -> bool:
    """True if the customer satisfies every criterion set in ``filters``."""
    if filters.age_group is not None and not filters.age_group.contains(customer.age):
        return False
    if filters.gender is not None and customer.gender.value.lower() != filters.gender.lower():
        return False
    if filters.cluster is not None and customer.cluster != filters.cluster:
        return False
    return True


class CustomerStore:
    """In-memory data store for customers and cluster summaries."""

    def __init__(
        self,
        customers: Iterable[Customer] = (),
        cluster_summaries: Optional[List[ClusterSummary]] = None,
    ):
        self._customers: Dict[int, Customer] = {}
        for customer in customers:
            if customer.id in self._customers:
                raise DatasetLoadError("Duplicate customer id", {"id": customer.id})
            self._customers[customer.id] = customer
        self._next_id = max(self._customers, default=0) + 1
        self._lock = threading.Lock()

        if cluster_summaries is None:
            cluster_summaries = build_cluster_summaries(list(self._customers.values()))
        self._cluster_summaries = list(cluster_summaries)

        known = self.known_clusters
        for customer in self._customers.values():
            if customer.cluster is not None and customer.cluster not in known:
                raise UnknownClusterError(customer.cluster, sorted(known))

        self._model_performance = reference_model_performance()

    @classmethod
    def from_seed(cls, seed: int = DEFAULT_SEED) -> "CustomerStore":
        """Store populated with the generated mall customer dataset."""
        customers = generate_customers(seed=seed)
        logger.info("customer_data_generated", seed=seed, customer_count=len(customers))
        return cls(customers)

    @classmethod
    def from_csv(cls, path: Union[str, Path]) -> "CustomerStore":
        """Store populated from a customer CSV file (export or Kaggle layout)."""
        customers = read_customers_csv(path)
        logger.info("customer_data_loaded", source=str(path), customer_count=len(customers))
        return cls(customers)

    # ==================== Customers ====================

    def __len__(self) -> int:
        return len(self._customers)

    def list_customers(self) -> List[Customer]:
        with self._lock:
            return list(self._customers.values())

    def filter_customers(self, filters: CustomerFilters) -> List[Customer]:
        customers = self.list_customers()
        if filters.is_empty:
            return customers
        return [c for c in customers if matches(c, filters)]

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self._customers.get(customer_id)

    def create_customer(self, payload: CustomerCreate) -> Customer:
        """
        Add a customer with a freshly assigned id.

        Raises:
            UnknownClusterError: payload references a cluster with no summary
        """
        if payload.cluster is not None and payload.cluster not in self.known_clusters:
            raise UnknownClusterError(payload.cluster, sorted(self.known_clusters))

        with self._lock:
            customer = Customer(id=self._next_id, **payload.model_dump())
            self._customers[customer.id] = customer
            self._next_id += 1

        logger.info("customer_created", id=customer.id, cluster=customer.cluster)
        return customer

    # ==================== Clusters ====================

    @property
    def known_clusters(self) -> set:
        return {summary.cluster for summary in self._cluster_summaries}

    def cluster_summaries(self) -> List[ClusterSummary]:
        return list(self._cluster_summaries)

    def summarize(self, filters: CustomerFilters) -> List[ClusterSummary]:
        """Cluster statistics recomputed over the customers matching ``filters``."""
        return summarize_clusters(self.filter_customers(filters))

    def model_performance(self) -> ModelPerformance:
        return self._model_performance

    def marketing_strategies(self) -> List[MarketingStrategy]:
        return [
            MarketingStrategy(**strategy)
            for strategy in marketing_strategies_for(list(self.known_clusters))
        ]

    # ==================== Summary statistics ====================

    def average_income(self) -> float:
        """Mean annual income; 0.0 for an empty store."""
        customers = self.list_customers()
        if not customers:
            return 0.0
        return statistics.fmean(c.annual_income for c in customers)

    def average_spending_score(self) -> float:
        """Mean spending score; 0.0 for an empty store."""
        customers = self.list_customers()
        if not customers:
            return 0.0
        return statistics.fmean(c.spending_score for c in customers)

    def summary(self) -> SummaryStats:
        return SummaryStats(
            total_customers=len(self._customers),
            avg_income=round_one_decimal(self.average_income()),
            avg_spending=round_one_decimal(self.average_spending_score()),
            total_clusters=len(self._cluster_summaries),
        )
