"""
Unit Tests for Customer Filters

Tests:
- Age bucket boundaries
- Query-string parsing ("all", empty, -1 treated as absent)
- Rejection of malformed values
"""

import pytest
from pydantic import ValidationError

from mall_segmentation.core.exceptions import InvalidFilterError
from mall_segmentation.models.filters import AgeGroup, CustomerFilters, parse_filters


class TestAgeGroup:
    """Test age bucket membership"""

    @pytest.mark.parametrize("group, age, expected", [
        (AgeGroup.AGE_18_30, 18, True),
        (AgeGroup.AGE_18_30, 30, True),
        (AgeGroup.AGE_18_30, 31, False),
        (AgeGroup.AGE_31_45, 31, True),
        (AgeGroup.AGE_31_45, 45, True),
        (AgeGroup.AGE_31_45, 46, False),
        (AgeGroup.AGE_46_60, 60, True),
        (AgeGroup.AGE_60_PLUS, 60, False),
        (AgeGroup.AGE_60_PLUS, 61, True),
    ])
    def test_contains(self, group, age, expected):
        assert group.contains(age) is expected


class TestCustomerFilters:
    """Test the filter criteria model"""

    def test_frozen(self):
        filters = CustomerFilters(cluster=1)

        with pytest.raises(ValidationError):
            filters.cluster = 2

    def test_equality_by_value(self):
        assert CustomerFilters(gender="male") == CustomerFilters(gender="male")
        assert CustomerFilters(age_group="31-45").age_group is AgeGroup.AGE_31_45


class TestParseFilters:
    """Test parsing raw query values"""

    def test_no_values_is_empty(self):
        assert parse_filters().is_empty

    @pytest.mark.parametrize("value", ["all", "ALL", ""])
    def test_all_and_empty_are_absent(self, value):
        filters = parse_filters(age_group=value, gender=value)

        assert filters == CustomerFilters()

    def test_cluster_minus_one_is_absent(self):
        assert parse_filters(cluster="-1").cluster is None

    def test_age_group(self):
        assert parse_filters(age_group="60+").age_group is AgeGroup.AGE_60_PLUS

    def test_gender_case_insensitive(self):
        assert parse_filters(gender="FeMale").gender == "female"

    @pytest.mark.parametrize("raw, expected", [("2", 2), ("2.0", 2), ("0", 0)])
    def test_integer_cluster(self, raw, expected):
        assert parse_filters(cluster=raw).cluster == expected

    @pytest.mark.parametrize("kwargs, field", [
        ({"age_group": "20-40"}, "ageGroup"),
        ({"gender": "other"}, "gender"),
        ({"cluster": "abc"}, "cluster"),
        ({"cluster": "2.5"}, "cluster"),
    ])
    def test_malformed_values_rejected(self, kwargs, field):
        with pytest.raises(InvalidFilterError) as exc_info:
            parse_filters(**kwargs)

        assert exc_info.value.field == field
