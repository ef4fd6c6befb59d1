"""
Cluster statistics aggregation.

Groups customers by cluster id and computes size and rounded averages of
age, income and spending score per cluster. Used for the startup cluster
summaries and for recomputing summaries over filtered customer sets.
"""

import statistics
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from mall_segmentation.models.customer import ClusterSummary, Customer
from mall_segmentation.segmentation.catalog import (
    cluster_color,
    cluster_summary_description,
    cluster_summary_label,
)

UNASSIGNED_CLUSTER = 0

_TENTH = Decimal("0.1")


def round_one_decimal(value: float) -> float:
    """
    Round to one decimal place, halves away from zero.

    Works on the shortest decimal repr of the float, so 49.45 rounds to
    49.5 even though its binary value is slightly below it.
    """
    return float(Decimal(repr(value)).quantize(_TENTH, rounding=ROUND_HALF_UP))


def group_by_cluster(customers: Iterable[Customer]) -> Dict[int, List[Customer]]:
    """Group customers by cluster id. Customers without a cluster go to 0."""
    groups: Dict[int, List[Customer]] = defaultdict(list)
    for customer in customers:
        cluster = customer.cluster if customer.cluster is not None else UNASSIGNED_CLUSTER
        groups[cluster].append(customer)
    return dict(groups)


def summarize_cluster(cluster: int, members: List[Customer]) -> ClusterSummary:
    """Summary for a single, non-empty group of customers."""
    return ClusterSummary(
        id=cluster + 1,
        cluster=cluster,
        avg_age=round_one_decimal(statistics.fmean(c.age for c in members)),
        avg_income=round_one_decimal(statistics.fmean(c.annual_income for c in members)),
        avg_spending=round_one_decimal(statistics.fmean(c.spending_score for c in members)),
        size=len(members),
        color=cluster_color(cluster),
        label=cluster_summary_label(cluster),
        description=cluster_summary_description(cluster),
    )


def summarize_clusters(customers: Iterable[Customer]) -> List[ClusterSummary]:
    """
    Compute per-cluster statistics for a customer collection.

    Args:
        customers: Any finite collection of customers

    Returns:
        One ClusterSummary per distinct cluster id present, sorted by
        cluster id. Empty input gives an empty list.
    """
    groups = group_by_cluster(customers)
    return [summarize_cluster(cluster, groups[cluster]) for cluster in sorted(groups)]
