"""
Mock mall-customer generation.

Produces the demo dataset: 200 customers drawn from five behavioral
cluster profiles (age, income and spending ranges per cluster). The
generator is seeded so the dataset is reproducible.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from mall_segmentation.models.customer import ClusterSummary, Customer, Gender
from mall_segmentation.segmentation.aggregation import group_by_cluster, summarize_cluster

DEFAULT_SEED = 42


@dataclass(frozen=True)
class ClusterProfile:
    """Value ranges used to draw the members of one cluster."""

    cluster: int
    size: int
    first_customer_id: int
    age_range: Tuple[int, int]
    income_range: Tuple[float, float]
    spending_range: Tuple[float, float]
    label: str
    description: str


CLUSTER_PROFILES: Tuple[ClusterProfile, ...] = (
    ClusterProfile(
        cluster=0, size=39, first_customer_id=1,
        age_range=(35, 50), income_range=(40, 70), spending_range=(35, 65),
        label="Careful Spenders",
        description="Low income, moderate spending customers who are price-conscious",
    ),
    ClusterProfile(
        cluster=1, size=22, first_customer_id=40,
        age_range=(20, 30), income_range=(15, 35), spending_range=(65, 95),
        label="Splurge Shoppers",
        description="Young customers with limited income but high spending behavior",
    ),
    ClusterProfile(
        cluster=2, size=35, first_customer_id=62,
        age_range=(35, 50), income_range=(70, 105), spending_range=(5, 30),
        label="Conservative Rich",
        description="High-income customers who are conservative with their spending",
    ),
    ClusterProfile(
        cluster=3, size=23, first_customer_id=97,
        age_range=(25, 40), income_range=(70, 105), spending_range=(65, 95),
        label="Premium Customers",
        description="Wealthy customers with high spending power and frequency",
    ),
    ClusterProfile(
        cluster=4, size=81, first_customer_id=120,
        age_range=(40, 55), income_range=(15, 35), spending_range=(10, 35),
        label="Standard Customers",
        description="Average income customers with modest spending patterns",
    ),
)


def _draw(rng: np.random.Generator, bounds: Tuple[float, float], size: int) -> np.ndarray:
    low, high = bounds
    return low + rng.random(size) * (high - low)


def generate_customers(
    seed: int = DEFAULT_SEED,
    profiles: Sequence[ClusterProfile] = CLUSTER_PROFILES,
) -> List[Customer]:
    """
    Generate the mock customer dataset.

    Args:
        seed: Seed for the random generator; same seed, same customers
        profiles: Cluster profiles to draw from

    Returns:
        Customers with sequential ids starting at 1, grouped by profile
    """
    rng = np.random.default_rng(seed)
    customers: List[Customer] = []
    next_id = 1

    for profile in profiles:
        males = rng.random(profile.size) > 0.5
        ages = np.floor(_draw(rng, profile.age_range, profile.size)).astype(int)
        incomes = _draw(rng, profile.income_range, profile.size)
        scores = _draw(rng, profile.spending_range, profile.size)

        for offset in range(profile.size):
            customers.append(Customer(
                id=next_id,
                customer_id=profile.first_customer_id + offset,
                gender=Gender.MALE if males[offset] else Gender.FEMALE,
                age=int(ages[offset]),
                annual_income=round(float(incomes[offset]), 1),
                spending_score=round(float(scores[offset]), 1),
                cluster=profile.cluster,
            ))
            next_id += 1

    return customers


def build_cluster_summaries(
    customers: Sequence[Customer],
    profiles: Sequence[ClusterProfile] = CLUSTER_PROFILES,
) -> List[ClusterSummary]:
    """
    Startup cluster summaries: aggregated statistics with each profile's
    own label and description.

    Unassigned customers are left out. Clusters present in the data but
    missing from ``profiles`` keep the generic aggregation labels.
    """
    by_cluster = {profile.cluster: profile for profile in profiles}
    groups = group_by_cluster(c for c in customers if c.cluster is not None)

    summaries = []
    for cluster in sorted(groups):
        summary = summarize_cluster(cluster, groups[cluster])
        profile = by_cluster.get(cluster)
        if profile is not None:
            summary = summary.model_copy(update={
                "label": profile.label,
                "description": profile.description,
            })
        summaries.append(summary)
    return summaries
