# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything the core passes around:
# the search criteria a tool assembles, and the narrow view of a search
# response the pagination engine inspects.
#
# RESOURCE PAYLOADS ARE NOT MODELLED:
#   Products, orders, customers and carts come back from the platform as
#   nested JSON of many shapes.  They stay plain dicts (JSONRecord).  Only
#   the two fields the core itself reads, total_count and items, get a
#   typed view (PagedResult).
#
# FILTER SEMANTICS (imposed by the platform, not by us):
#   - Filters inside one FilterGroup are OR-ed.
#   - FilterGroups inside one SearchCriteria are AND-ed.
#   Group index and filter index are both baked into the query-string keys,
#   so list order here IS the wire order.
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

JSONRecord = dict[str, Any]
FilterValue = Union[str, int, float, bool]


# -----------------------------------------------------------------------------
# Filter — one logical predicate
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Filter:
    """A single ``field <condition_type> value`` predicate.

    ``condition_type`` is passed to the platform verbatim.  ``like`` values
    are NOT wrapped in ``%`` here; call sites use ``criteria.contains()``.
    """

    field: str
    value: FilterValue
    condition_type: str = "eq"


# -----------------------------------------------------------------------------
# FilterGroup — OR-ed filters
# -----------------------------------------------------------------------------
@dataclass
class FilterGroup:
    """Filters combined with logical OR.  Must hold at least one filter."""

    filters: list[Filter] = field(default_factory=list)


# -----------------------------------------------------------------------------
# SortOrder
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: str = "DESC"            # "ASC" or "DESC"


# -----------------------------------------------------------------------------
# SearchCriteria — the aggregate a tool builds fresh for every query
# -----------------------------------------------------------------------------
@dataclass
class SearchCriteria:
    """Filter groups (AND-ed), sort orders and a page descriptor.

    ``page_size`` / ``current_page`` are Optional so the pagination engine
    can tell "caller chose a page size" apart from "caller didn't care".
    The query builder fills unset values with its defaults.
    """

    filter_groups: list[FilterGroup] = field(default_factory=list)
    sort_orders: list[SortOrder] = field(default_factory=list)
    page_size: Optional[int] = None
    current_page: Optional[int] = None

    def where(self, field_name: str, value: FilterValue, condition_type: str = "eq") -> "SearchCriteria":
        """AND a single-filter group onto the criteria."""
        self.filter_groups.append(FilterGroup([Filter(field_name, value, condition_type)]))
        return self

    def any_of(self, *filters: Filter) -> "SearchCriteria":
        """AND one group whose filters are OR-ed together."""
        self.filter_groups.append(FilterGroup(list(filters)))
        return self

    def sort_by(self, field_name: str, direction: str = "DESC") -> "SearchCriteria":
        self.sort_orders.append(SortOrder(field_name, direction.upper()))
        return self

    def paginate(self, page_size: Optional[int], current_page: Optional[int] = None) -> "SearchCriteria":
        self.page_size = page_size
        self.current_page = current_page
        return self


# -----------------------------------------------------------------------------
# PagedResult — typed view of a search response
# -----------------------------------------------------------------------------
# The platform answers every */search endpoint with
#   {"items": [...], "search_criteria": {...}, "total_count": N}
# Either field may be missing (or, for items, not a list).  Missing is
# read as "zero" / "empty", never as an error.
# -----------------------------------------------------------------------------
@dataclass
class PagedResult:
    total_count: int = 0
    items: list[JSONRecord] = field(default_factory=list)
    has_items: bool = False            # False when "items" was absent or not a list

    @classmethod
    def from_response(cls, data: Any) -> "PagedResult":
        if not isinstance(data, dict):
            return cls()

        raw_total = data.get("total_count")
        try:
            total_count = int(raw_total) if raw_total is not None else 0
        except (TypeError, ValueError):
            total_count = 0

        raw_items = data.get("items")
        if isinstance(raw_items, list):
            return cls(total_count=total_count, items=list(raw_items), has_items=True)
        return cls(total_count=total_count)


# -----------------------------------------------------------------------------
# DateRange — output of core.dates.parse_date_expression
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime
    description: str                   # "Last month", "2024-01-01 to 2024-01-31"
