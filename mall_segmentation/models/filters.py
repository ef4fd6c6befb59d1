"""
Customer filter criteria and query-string parsing.

Raw query values are validated here, before they reach the store.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from mall_segmentation.core.exceptions import InvalidFilterError

ALL = "all"
ALL_CLUSTERS = -1


class AgeGroup(str, Enum):
    """Fixed, non-overlapping age buckets (inclusive bounds)."""

    AGE_18_30 = "18-30"
    AGE_31_45 = "31-45"
    AGE_46_60 = "46-60"
    AGE_60_PLUS = "60+"

    def contains(self, age: int) -> bool:
        if self is AgeGroup.AGE_60_PLUS:
            return age > 60
        low, high = (int(part) for part in self.value.split("-"))
        return low <= age <= high


GENDERS = ("male", "female")


class CustomerFilters(BaseModel):
    """Filter criteria combined with logical AND. ``None`` means no filter."""

    model_config = ConfigDict(frozen=True)

    age_group: Optional[AgeGroup] = None
    gender: Optional[str] = None
    cluster: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.age_group is None and self.gender is None and self.cluster is None


def _parse_cluster(raw: str) -> Optional[int]:
    try:
        number = float(raw)
    except ValueError:
        raise InvalidFilterError("cluster", raw) from None
    if not number.is_integer():
        raise InvalidFilterError("cluster", raw)
    cluster = int(number)
    return None if cluster == ALL_CLUSTERS else cluster


def parse_filters(
    age_group: Optional[str] = None,
    gender: Optional[str] = None,
    cluster: Optional[str] = None,
) -> CustomerFilters:
    """
    Build CustomerFilters from raw query-string values.

    Empty strings and "all" (or cluster -1) are treated as absent.

    Raises:
        InvalidFilterError: unknown age group or gender, or a cluster that
            is not an integer.
    """
    parsed_age_group = None
    if age_group and age_group.strip().lower() != ALL:
        try:
            parsed_age_group = AgeGroup(age_group.strip())
        except ValueError:
            raise InvalidFilterError("ageGroup", age_group) from None

    parsed_gender = None
    if gender and gender.strip().lower() != ALL:
        parsed_gender = gender.strip().lower()
        if parsed_gender not in GENDERS:
            raise InvalidFilterError("gender", gender)

    parsed_cluster = None
    if cluster is not None and cluster.strip() != "":
        parsed_cluster = _parse_cluster(cluster.strip())

    return CustomerFilters(age_group=parsed_age_group, gender=parsed_gender, cluster=parsed_cluster)
