"""
Cluster display catalog.

Static lookup tables keyed by cluster id. Every lookup has an explicit
default for ids outside the table.
"""

from typing import Dict, List

DEFAULT_COLOR = "#6b7280"
DEFAULT_LABEL = "Other"
DEFAULT_DESCRIPTION = "Other customer segment"

CLUSTER_COLORS: Dict[int, str] = {
    0: "#ef4444",
    1: "#f59e0b",
    2: "#10b981",
    3: "#06b6d4",
    4: "#8b5cf6",
}

# Labels used when summarizing an arbitrary (e.g. filtered) customer set.
# Only the four quadrant segments have names here; everything else is "Other".
CLUSTER_LABELS: Dict[int, str] = {
    0: "Careful Spenders",
    1: "Splurge Shoppers",
    2: "Conservative Rich",
    3: "Premium Customers",
}

CLUSTER_DESCRIPTIONS: Dict[int, str] = {
    0: "Low income, low spending customers",
    1: "Low income, high spending customers",
    2: "High income, low spending customers",
    3: "High income, high spending customers",
}

# Segment names for legends and dropdowns.
SEGMENT_NAMES: Dict[int, str] = {
    0: "Careful Spenders",
    1: "Splurge Shoppers",
    2: "Conservative Rich",
    3: "Premium Customers",
    4: "Standard Customers",
}

MARKETING_STRATEGIES: Dict[int, Dict] = {
    0: {
        "title": "Careful Spenders",
        "description": "Low income, moderate spending customers",
        "strategies": [
            "Budget-friendly promotions",
            "Value-for-money products",
            "Loyalty programs",
        ],
    },
    1: {
        "title": "Splurge Shoppers",
        "description": "Low income, high spending customers",
        "strategies": [
            "Impulse buying triggers",
            "Flash sales and discounts",
            "Credit options",
        ],
    },
    2: {
        "title": "Conservative Rich",
        "description": "High income, low spending customers",
        "strategies": [
            "Premium quality emphasis",
            "Investment-focused products",
            "Exclusive experiences",
        ],
    },
    3: {
        "title": "Premium Customers",
        "description": "High income, high spending customers",
        "strategies": [
            "Luxury products and services",
            "VIP treatment programs",
            "Personal shopping assistance",
        ],
    },
    4: {
        "title": "Standard Customers",
        "description": "Average income, average spending customers",
        "strategies": [
            "Balanced product offerings",
            "Seasonal promotions",
            "Cross-selling opportunities",
        ],
    },
}


def cluster_color(cluster_id: int) -> str:
    return CLUSTER_COLORS.get(cluster_id, DEFAULT_COLOR)


def cluster_summary_label(cluster_id: int) -> str:
    return CLUSTER_LABELS.get(cluster_id, DEFAULT_LABEL)


def cluster_summary_description(cluster_id: int) -> str:
    return CLUSTER_DESCRIPTIONS.get(cluster_id, DEFAULT_DESCRIPTION)


def cluster_label(cluster_id: int) -> str:
    """Display name for a cluster id, e.g. "Premium Customers" or "Cluster 7"."""
    return SEGMENT_NAMES.get(cluster_id, f"Cluster {cluster_id}")


def marketing_strategies_for(cluster_ids: List[int]) -> List[Dict]:
    """Strategy cards for the given clusters, skipping ids with no entry."""
    return [
        {"cluster": cluster_id, **MARKETING_STRATEGIES[cluster_id]}
        for cluster_id in sorted(cluster_ids)
        if cluster_id in MARKETING_STRATEGIES
    ]
