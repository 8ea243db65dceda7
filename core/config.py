# =============================================================================
# core/config.py  —  Connection Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the platform connection settings ONCE, at process start, into a
#   frozen MagentoConfig that main.py passes to MagentoClient.  Nothing else
#   in the codebase reads these environment variables.
#
# ENVIRONMENT VARIABLES:
#   MAGENTO_BASE_URL               e.g. https://shop.example.com/rest/V1
#   MAGENTO_API_TOKEN              integration access token (Bearer)
#   MAGENTO_VERIFY_SSL             "false" / "0" / "no" trusts any certificate
#   NODE_TLS_REJECT_UNAUTHORIZED   "0" also disables verification (kept for
#                                  .env files shared with Node tooling)
#   MAGENTO_TIMEOUT                request timeout in seconds   (default 30)
#   MAGENTO_FETCH_PAGE_SIZE        page size for full fetches  (default 100)
#   MAGENTO_MAX_PAGES              page cap for full fetches, 0 = no cap
#   MAGENTO_LOG_LEVEL              DEBUG / INFO / WARNING ...  (default INFO)
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigError
from core.pagination import DEFAULT_FETCH_PAGE_SIZE

logger = logging.getLogger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class MagentoConfig:
    """Everything MagentoClient needs to reach the admin REST API."""

    base_url: str = ""
    api_token: str = ""
    verify_ssl: bool = True
    timeout: float = 30.0
    fetch_page_size: int = DEFAULT_FETCH_PAGE_SIZE
    max_pages: int = 0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MagentoConfig":
        """Build a config from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ

        verify_ssl = (
            env.get("MAGENTO_VERIFY_SSL", "true").strip().lower() not in _FALSE_VALUES
            and env.get("NODE_TLS_REJECT_UNAUTHORIZED", "1").strip() != "0"
        )

        config = cls(
            base_url=env.get("MAGENTO_BASE_URL", "").strip().rstrip("/"),
            api_token=env.get("MAGENTO_API_TOKEN", "").strip(),
            verify_ssl=verify_ssl,
            timeout=_read_number(env, "MAGENTO_TIMEOUT", 30.0, float),
            fetch_page_size=_read_number(env, "MAGENTO_FETCH_PAGE_SIZE", DEFAULT_FETCH_PAGE_SIZE, int),
            max_pages=_read_number(env, "MAGENTO_MAX_PAGES", 0, int),
            log_level=env.get("MAGENTO_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

        if config.fetch_page_size <= 0:
            raise ConfigError("MAGENTO_FETCH_PAGE_SIZE must be a positive integer")
        if config.max_pages < 0:
            raise ConfigError("MAGENTO_MAX_PAGES must be 0 (unbounded) or positive")

        if not config.base_url or not config.api_token:
            logger.warning("MAGENTO_BASE_URL or MAGENTO_API_TOKEN is not set; API calls will fail")
        if not config.verify_ssl:
            logger.warning("TLS certificate verification is disabled")

        return config


def _read_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc
