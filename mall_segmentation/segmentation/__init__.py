"""
Mall customer segmentation

Cluster catalog, statistics aggregation, mock data generation and the
reference model-performance curves.
"""

from .aggregation import round_one_decimal, summarize_clusters, group_by_cluster
from .catalog import cluster_color, cluster_label, marketing_strategies_for
from .generation import (
    CLUSTER_PROFILES,
    DEFAULT_SEED,
    ClusterProfile,
    build_cluster_summaries,
    generate_customers,
)
from .model_performance import reference_model_performance

__all__ = [
    'round_one_decimal',
    'summarize_clusters',
    'group_by_cluster',
    'cluster_color',
    'cluster_label',
    'marketing_strategies_for',
    'CLUSTER_PROFILES',
    'DEFAULT_SEED',
    'ClusterProfile',
    'build_cluster_summaries',
    'generate_customers',
    'reference_model_performance',
]
