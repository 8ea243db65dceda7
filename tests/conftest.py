"""
Shared fixtures for the Magento MCP server test suite.

Provides a MagentoClient wired to an in-process httpx.MockTransport, plus a
fake search endpoint that serves a collection page by page.
"""

import sys
from dataclasses import replace
from pathlib import Path

import httpx
import pytest

# Ensure the project root is on sys.path so tests can import project modules
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from core.api_client import MagentoClient  # noqa: E402
from core.config import MagentoConfig  # noqa: E402

BASE_URL = "https://shop.test/rest/V1"


class FakeSearchEndpoint:
    """Serves ``total_count`` items in pages, honouring the request's
    ``searchCriteria[pageSize]`` and ``searchCriteria[currentPage]``.

    ``page_lengths`` overrides how many items each page returns, for
    servers that misreport total_count.  ``fail_on_page`` answers that page
    with HTTP 500.  Every request is kept in ``requests``.
    """

    def __init__(self, total_count, page_lengths=None, fail_on_page=None, report_total=None):
        self.total_count = total_count
        self.page_lengths = page_lengths
        self.fail_on_page = fail_on_page
        self.report_total = total_count if report_total is None else report_total
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        page_size = int(params["searchCriteria[pageSize]"])
        current_page = int(params["searchCriteria[currentPage]"])

        if current_page == self.fail_on_page:
            return httpx.Response(500, json={"message": "Internal Error. Details are available in Magento log file."})

        start = (current_page - 1) * page_size
        if self.page_lengths is not None:
            length = self.page_lengths[current_page - 1] if current_page <= len(self.page_lengths) else 0
        else:
            length = max(0, min(page_size, self.total_count - start))

        items = [{"entity_id": start + i + 1} for i in range(length)]
        return httpx.Response(200, json={"items": items, "total_count": self.report_total})

    @property
    def pages_requested(self):
        return [int(r.url.params["searchCriteria[currentPage]"]) for r in self.requests]


@pytest.fixture
def config():
    return MagentoConfig(base_url=BASE_URL, api_token="test-token")


@pytest.fixture
def make_client(config):
    """Build a MagentoClient whose requests are answered by ``handler``."""

    def _make(handler, **overrides):
        cfg = replace(config, **overrides)
        return MagentoClient(cfg, transport=httpx.MockTransport(handler))

    return _make
