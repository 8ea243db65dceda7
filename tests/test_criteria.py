"""
Unit tests for core/criteria.py

Tests cover:
- Pagination keys and defaults
- Filter-group / filter indexing
- Value escaping
- Sort orders and key ordering
- Determinism and rejection of empty filter groups
"""

from urllib.parse import parse_qs

import pytest

from core.criteria import (
    DEFAULT_PAGE_SIZE,
    QueryParams,
    build_query_params,
    contains,
    encode_criteria,
    stringify,
    with_query,
)
from core.errors import CriteriaError
from core.models import Filter, FilterGroup, SearchCriteria


# =============================================================================
# Pagination Keys
# =============================================================================


class TestPaginationKeys:

    def test_page_keys_only(self):
        criteria = SearchCriteria().paginate(25, 3)
        assert encode_criteria(criteria) == "searchCriteria[pageSize]=25&searchCriteria[currentPage]=3"

    def test_unset_page_descriptor_uses_defaults(self):
        encoded = encode_criteria(SearchCriteria())
        assert encoded == f"searchCriteria[pageSize]={DEFAULT_PAGE_SIZE}&searchCriteria[currentPage]=1"

    def test_each_page_key_appears_once(self):
        criteria = SearchCriteria().where("status", "complete").paginate(10, 2)
        parsed = parse_qs(encode_criteria(criteria))
        assert parsed["searchCriteria[pageSize]"] == ["10"]
        assert parsed["searchCriteria[currentPage]"] == ["2"]


# =============================================================================
# Filter Groups
# =============================================================================


class TestFilterGroups:

    def test_groups_are_indexed_from_zero(self):
        criteria = SearchCriteria().where("status", "complete").where("customer_id", 42)
        params = dict(build_query_params(criteria))

        assert params["searchCriteria[filter_groups][0][filters][0][field]"] == "status"
        assert params["searchCriteria[filter_groups][0][filters][0][value]"] == "complete"
        assert params["searchCriteria[filter_groups][0][filters][0][condition_type]"] == "eq"
        assert params["searchCriteria[filter_groups][1][filters][0][field]"] == "customer_id"
        assert params["searchCriteria[filter_groups][1][filters][0][value]"] == "42"
        assert not any("[1][filters][1]" in key for key in params)

    def test_or_filters_share_a_group(self):
        criteria = SearchCriteria().any_of(
            Filter("status", "pending"),
            Filter("status", "processing"),
        )
        params = dict(build_query_params(criteria))

        assert params["searchCriteria[filter_groups][0][filters][0][value]"] == "pending"
        assert params["searchCriteria[filter_groups][0][filters][1][value]"] == "processing"
        assert not any("[filter_groups][1]" in key for key in params)

    def test_unknown_condition_passes_through(self):
        criteria = SearchCriteria().where("sku", "A,B", "finset")
        params = dict(build_query_params(criteria))
        assert params["searchCriteria[filter_groups][0][filters][0][condition_type]"] == "finset"

    def test_empty_group_is_rejected(self):
        criteria = SearchCriteria(filter_groups=[FilterGroup([Filter("a", 1)]), FilterGroup([])])
        with pytest.raises(CriteriaError, match="Filter group 1"):
            encode_criteria(criteria)

    def test_empty_group_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            encode_criteria(SearchCriteria(filter_groups=[FilterGroup()]))


# =============================================================================
# Value Escaping
# =============================================================================


class TestValueEscaping:

    @pytest.mark.parametrize("value", ["Tom & Jerry", "100% cotton", "a b", "x=y/z?", "50+"])
    def test_values_decode_back_exactly(self, value):
        criteria = SearchCriteria().where("name", value)
        parsed = parse_qs(encode_criteria(criteria))
        assert parsed["searchCriteria[filter_groups][0][filters][0][value]"] == [value]

    def test_special_characters_are_percent_encoded(self):
        encoded = encode_criteria(SearchCriteria().where("name", "a & b%"))
        assert "[value]=a%20%26%20b%25" in encoded

    def test_like_wildcards_are_encoded(self):
        encoded = encode_criteria(SearchCriteria().where("name", contains("shirt"), "like"))
        assert "[value]=%25shirt%25" in encoded

    def test_stringify(self):
        assert stringify(True) == "true"
        assert stringify(False) == "false"
        assert stringify(10.0) == "10"
        assert stringify(9.99) == "9.99"
        assert stringify(7) == "7"


# =============================================================================
# Sort Orders and Ordering
# =============================================================================


class TestSortAndOrdering:

    def test_sort_keys_come_last(self):
        criteria = (
            SearchCriteria()
            .sort_by("created_at", "desc")
            .where("status", "complete")
            .paginate(5, 1)
        )
        keys = [key for key, _ in build_query_params(criteria)]

        assert keys[:2] == ["searchCriteria[pageSize]", "searchCriteria[currentPage]"]
        assert keys[-2:] == ["searchCriteria[sortOrders][0][field]", "searchCriteria[sortOrders][0][direction]"]
        assert dict(build_query_params(criteria))["searchCriteria[sortOrders][0][direction]"] == "DESC"

    def test_multiple_sort_orders(self):
        criteria = SearchCriteria().sort_by("status", "ASC").sort_by("created_at")
        params = dict(build_query_params(criteria))
        assert params["searchCriteria[sortOrders][0][field]"] == "status"
        assert params["searchCriteria[sortOrders][1][field]"] == "created_at"
        assert params["searchCriteria[sortOrders][1][direction]"] == "DESC"

    def test_encoding_is_deterministic(self):
        criteria = (
            SearchCriteria()
            .where("status", "complete")
            .any_of(Filter("grand_total", 10, "gt"), Filter("grand_total", 0, "null"))
            .sort_by("entity_id")
            .paginate(50, 4)
        )
        assert encode_criteria(criteria) == encode_criteria(criteria)

    def test_with_query(self):
        url = with_query("/orders", SearchCriteria().paginate(1, 1))
        assert url == "/orders?searchCriteria[pageSize]=1&searchCriteria[currentPage]=1"


# =============================================================================
# QueryParams
# =============================================================================


class TestQueryParams:

    def test_upsert_replaces_in_place(self):
        params = QueryParams().upsert("a", 1).upsert("b", 2).upsert("a", 3)
        assert list(params) == [("a", "3"), ("b", "2")]
        assert params.encode() == "a=3&b=2"

    def test_get_and_contains(self):
        params = QueryParams().upsert("searchCriteria[currentPage]", 2)
        assert "searchCriteria[currentPage]" in params
        assert params.get("searchCriteria[currentPage]") == "2"
        assert params.get("missing") is None
        assert len(params) == 1
