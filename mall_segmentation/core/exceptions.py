"""
Exception hierarchy for the segmentation domain

Raised by the store, generator and CSV codec. The API layer translates
these into HTTP errors (see middleware.error_handling).
"""

from typing import Dict, Any, Optional


class SegmentationError(Exception):
    """Base exception for all segmentation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidFilterError(SegmentationError):
    """Raised when a customer filter parameter is malformed."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"Invalid filter value for {field}: {value!r}",
            {"field": field, "value": value},
        )
        self.field = field


class UnknownClusterError(SegmentationError):
    """Raised when a customer references a cluster id the store does not know."""

    def __init__(self, cluster: int, known: Optional[list] = None):
        super().__init__(
            f"Unknown cluster: {cluster}",
            {"cluster": cluster, "known_clusters": known or []},
        )
        self.cluster = cluster


class DatasetLoadError(SegmentationError):
    """Raised when a customer dataset cannot be read or parsed."""
