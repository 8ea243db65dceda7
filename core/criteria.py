# =============================================================================
# core/criteria.py  —  Search-Criteria Query-String Builder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a SearchCriteria value into the platform's nested query-string
#   dialect, e.g.
#
#     searchCriteria[pageSize]=20
#     &searchCriteria[currentPage]=1
#     &searchCriteria[filter_groups][0][filters][0][field]=status
#     &searchCriteria[filter_groups][0][filters][0][value]=complete
#     &searchCriteria[filter_groups][0][filters][0][condition_type]=eq
#     &searchCriteria[sortOrders][0][field]=created_at
#     &searchCriteria[sortOrders][0][direction]=DESC
#
# KEY ORDER:
#   pagination → filter groups (ascending group, then filter index) → sort.
#   The platform doesn't care about order, but tests and logs do, so the
#   output is fully deterministic: same criteria in, same bytes out.
#
# ESCAPING:
#   Keys are written literally (brackets included).  Values are percent-
#   encoded with NO safe characters, so "&", "%", "/" and spaces can never
#   leak into the key/value structure.
#
# NO VALIDATION:
#   Field names and condition types pass through untouched.  Rejecting an
#   unknown operator is the platform's job.  The one thing we do reject is
#   a FilterGroup with no filters, because encoding it would silently drop
#   an AND clause.
# =============================================================================

from typing import Iterator, Optional
from urllib.parse import quote

from core.errors import CriteriaError
from core.models import FilterValue, SearchCriteria

# Operators the platform understands.  Informational only.
CONDITION_TYPES = frozenset({
    "eq", "like", "gt", "lt", "gteq", "lteq", "neq",
    "in", "nin", "null", "notnull",
})

# Page size used when a criteria value leaves it unset.
DEFAULT_PAGE_SIZE = 20

PAGE_SIZE_KEY = "searchCriteria[pageSize]"
CURRENT_PAGE_KEY = "searchCriteria[currentPage]"


def contains(value: FilterValue) -> str:
    """Wrap a value in ``%`` wildcards for a ``like`` filter."""
    return f"%{stringify(value)}%"


def stringify(value: FilterValue) -> str:
    """Serialize a filter value the way the platform expects to read it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class QueryParams:
    """Ordered key/value pairs with insert-or-replace semantics.

    ``upsert`` keeps a key at its original position when it already exists,
    so re-encoding after changing the current page only touches that one
    value.
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []
        self._index: dict[str, int] = {}

    def upsert(self, key: str, value: FilterValue) -> "QueryParams":
        text = stringify(value)
        position = self._index.get(key)
        if position is None:
            self._index[key] = len(self._pairs)
            self._pairs.append((key, text))
        else:
            self._pairs[position] = (key, text)
        return self

    def get(self, key: str) -> Optional[str]:
        position = self._index.get(key)
        return None if position is None else self._pairs[position][1]

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def encode(self) -> str:
        return "&".join(f"{key}={quote(value, safe='')}" for key, value in self._pairs)


def build_query_params(criteria: SearchCriteria) -> QueryParams:
    """Lay a SearchCriteria out as ordered query parameters.

    Raises:
        CriteriaError: if any filter group is empty.
    """
    params = QueryParams()
    page_size = criteria.page_size if criteria.page_size is not None else DEFAULT_PAGE_SIZE
    current_page = criteria.current_page if criteria.current_page is not None else 1
    params.upsert(PAGE_SIZE_KEY, page_size)
    params.upsert(CURRENT_PAGE_KEY, current_page)

    for g, group in enumerate(criteria.filter_groups):
        if not group.filters:
            raise CriteriaError(f"Filter group {g} has no filters")
        for f, flt in enumerate(group.filters):
            prefix = f"searchCriteria[filter_groups][{g}][filters][{f}]"
            params.upsert(f"{prefix}[field]", flt.field)
            params.upsert(f"{prefix}[value]", flt.value)
            params.upsert(f"{prefix}[condition_type]", flt.condition_type)

    for s, order in enumerate(criteria.sort_orders):
        params.upsert(f"searchCriteria[sortOrders][{s}][field]", order.field)
        params.upsert(f"searchCriteria[sortOrders][{s}][direction]", order.direction)

    return params


def encode_criteria(criteria: SearchCriteria) -> str:
    """Encode criteria as a query string without the leading ``?``."""
    return build_query_params(criteria).encode()


def with_query(endpoint: str, criteria: SearchCriteria) -> str:
    """``/orders`` + criteria → ``/orders?searchCriteria[...]...``"""
    return f"{endpoint}?{encode_criteria(criteria)}"
