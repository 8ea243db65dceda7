# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Everything the core raises derives from MagentoError, so the tool layer
# can turn any core failure into an {"error": ...} reply with one except.
#
#   CriteriaError        malformed SearchCriteria (e.g. an empty FilterGroup)
#   MagentoApiError      transport failure or non-2xx API response
#   FetchCancelledError  a multi-page fetch was cancelled between pages
#   PageLimitError       a multi-page fetch hit its max_pages safety valve
#   ConfigError          unusable configuration values
#   DateExpressionError  unparseable date expression
#
# The core never recovers from these.  It raises and lets the caller decide.
# =============================================================================

from typing import Any, Optional


class MagentoError(Exception):
    """Base class for every error raised by core/."""


class CriteriaError(MagentoError, ValueError):
    """SearchCriteria cannot be encoded."""


class ConfigError(MagentoError, ValueError):
    """An environment value could not be parsed."""


class DateExpressionError(MagentoError, ValueError):
    """A date expression such as "last fortnight" is not understood."""


class MagentoApiError(MagentoError):
    """The HTTP call failed, either in transport or with a non-2xx status.

    Attributes:
        message: Human-readable reason (the platform's ``message`` field when
            the response carried one, otherwise the transport error).
        status_code: HTTP status, or None when no response was received.
        payload: The decoded error body, when there was one.
        endpoint: The endpoint that was being called.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.endpoint = endpoint

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class FetchCancelledError(MagentoError):
    """Raised when a cancel event is set before the next page is requested."""

    def __init__(self, endpoint: str, pages_fetched: int):
        super().__init__(f"Fetch of {endpoint} cancelled after {pages_fetched} page(s)")
        self.endpoint = endpoint
        self.pages_fetched = pages_fetched


class PageLimitError(MagentoError):
    """Raised when a fetch would exceed its configured max_pages."""

    def __init__(self, endpoint: str, max_pages: int):
        super().__init__(
            f"Fetch of {endpoint} exceeded the limit of {max_pages} page(s); "
            "narrow the filters or raise MAGENTO_MAX_PAGES"
        )
        self.endpoint = endpoint
        self.max_pages = max_pages
