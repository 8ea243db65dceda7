# =============================================================================
# core/pagination.py  —  Paginated Fetch Engine
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Walks a filtered collection page by page until every item has been
#   retrieved, and hands back one flat list in server order.
#
# THE LOOP:
#   page 1, 2, 3, ... each one a single GET through MagentoClient:
#     - items from every page are appended in the order received
#     - total_count is read from page 1 only
#     - stop when  accumulated >= total_count
#              or  the page had no "items" list
#              or  the page came back shorter than the page size
#
#   The short-page rule wins over total_count: a server that says
#   total_count=500 but returns 7 items on page 1 ends the fetch there.
#
# ALL OR NOTHING:
#   A failure on any page propagates straight out of fetch_all_pages().
#   Items gathered from earlier pages are dropped with the stack frame.
#
# KNOWN WEAKNESS:
#   Offset pagination over a collection that changes mid-walk can skip or
#   repeat records.  Nothing here deduplicates.
# =============================================================================

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING, Optional

from core.criteria import CURRENT_PAGE_KEY, build_query_params, with_query
from core.errors import FetchCancelledError, PageLimitError
from core.models import JSONRecord, PagedResult, SearchCriteria

if TYPE_CHECKING:
    from core.api_client import MagentoClient

# Page size used when the caller's criteria leaves it unset.
DEFAULT_FETCH_PAGE_SIZE = 100


async def fetch_page(
    client: "MagentoClient",
    endpoint: str,
    criteria: SearchCriteria,
) -> PagedResult:
    """Run one search request and return its typed view."""
    data = await client.get(with_query(endpoint, criteria))
    return PagedResult.from_response(data)


async def fetch_all_pages(
    client: "MagentoClient",
    endpoint: str,
    criteria: Optional[SearchCriteria] = None,
    *,
    page_size: int = DEFAULT_FETCH_PAGE_SIZE,
    max_pages: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> list[JSONRecord]:
    """Fetch every item of a filtered collection.

    Args:
        client: HTTP primitive used for each page request.
        endpoint: Collection endpoint, e.g. ``"/orders"``.
        criteria: Filters and sort orders to apply.  A page size set here is
            kept as-is; only the current page is advanced.  Not mutated.
        page_size: Page size to use when ``criteria`` leaves it unset.
        max_pages: Optional upper bound on requests.  ``None`` or ``0``
            means unbounded.
        cancel_event: When set, the next page is not requested and
            FetchCancelledError is raised.

    Returns:
        All items across all pages, in server order.

    Raises:
        MagentoApiError: any page request failed.
        FetchCancelledError: ``cancel_event`` was set between pages.
        PageLimitError: more than ``max_pages`` pages would be needed.
        CriteriaError: ``criteria`` cannot be encoded.
    """
    base = criteria if criteria is not None else SearchCriteria()
    effective_page_size = base.page_size if base.page_size is not None else page_size
    params = build_query_params(replace(base, page_size=effective_page_size, current_page=1))

    all_items: list[JSONRecord] = []
    total_count = 0
    current_page = 1

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelledError(endpoint, current_page - 1)
        if max_pages and current_page > max_pages:
            raise PageLimitError(endpoint, max_pages)

        params.upsert(CURRENT_PAGE_KEY, current_page)
        page = PagedResult.from_response(await client.get(f"{endpoint}?{params.encode()}"))
        all_items.extend(page.items)

        if current_page == 1:
            total_count = page.total_count

        if (
            len(all_items) >= total_count
            or not page.has_items
            or len(page.items) < effective_page_size
        ):
            break

        current_page += 1

    return all_items
