# =============================================================================
# core/api_client.py  —  HTTP Call Primitive for the Admin REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One authenticated request/response cycle against the platform:
#     endpoint + method + optional JSON body  →  decoded JSON
#
#   Every request carries
#     Authorization: Bearer <token>
#     Content-Type:  application/json
#
# FAILURES:
#   - Transport problems (DNS, refused connection, TLS, timeout) and
#     non-2xx responses both raise MagentoApiError.
#   - For API errors the platform's own "message" is surfaced, with its
#     %1 / %fieldName placeholders filled in from "parameters".
#   - Nothing is retried.  The first failure goes straight to the caller.
#
# TLS:
#   MagentoConfig.verify_ssl=False trusts any certificate, for development
#   stores running on self-signed certs.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import MagentoConfig
from core.errors import MagentoApiError

logger = logging.getLogger(__name__)


class MagentoClient:
    """Async client for the admin REST API.

    Usage::

        async with MagentoClient(config) as client:
            order = await client.get("/orders/42")
    """

    def __init__(self, config: MagentoConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.api_token}",
                "Content-Type": "application/json",
            },
            verify=config.verify_ssl,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def config(self) -> MagentoConfig:
        return self._config

    async def request(self, endpoint: str, method: str = "GET", data: Any = None) -> Any:
        """Send one request and return the decoded response body.

        Args:
            endpoint: Path relative to the base URL, query string included
                (e.g. ``"/orders?searchCriteria[pageSize]=20"``).
            method: GET, POST, PUT or DELETE.
            data: JSON-serializable body, or None for no body.

        Raises:
            MagentoApiError: transport failure or non-2xx status.
        """
        method = method.upper()
        if not self._config.base_url:
            raise MagentoApiError("MAGENTO_BASE_URL is not configured", endpoint=endpoint)

        try:
            response = await self._http.request(method, endpoint, json=data)
        except httpx.HTTPError as exc:
            reason = str(exc) or exc.__class__.__name__
            logger.error("Magento API error: %s %s: %s", method, endpoint, reason)
            raise MagentoApiError(f"Request failed: {reason}", endpoint=endpoint) from exc

        payload = _decode_body(response)
        if response.is_error:
            message = render_error_message(payload) or response.reason_phrase or "Request failed"
            logger.error("Magento API error: %s %s -> %s %s", method, endpoint, response.status_code, message)
            raise MagentoApiError(message, response.status_code, payload, endpoint)

        return payload

    async def get(self, endpoint: str) -> Any:
        return await self.request(endpoint, "GET")

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self.request(endpoint, "POST", data)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self.request(endpoint, "PUT", data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request(endpoint, "DELETE")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "MagentoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def render_error_message(payload: Any) -> Optional[str]:
    """Pull ``message`` out of an error body and fill in its placeholders.

    The platform sends either positional parameters::

        {"message": "The \\"%1\\" value is invalid", "parameters": ["sku"]}

    or named ones::

        {"message": "No such entity with %fieldName = %fieldValue",
         "parameters": {"fieldName": "sku", "fieldValue": "ABC"}}
    """
    if not isinstance(payload, dict) or not payload.get("message"):
        return None

    message = str(payload["message"])
    parameters = payload.get("parameters")

    if isinstance(parameters, list):
        # Highest index first so %1 doesn't clobber %10.
        for position in range(len(parameters), 0, -1):
            message = message.replace(f"%{position}", str(parameters[position - 1]))
    elif isinstance(parameters, dict):
        for name in sorted(parameters, key=len, reverse=True):
            message = message.replace(f"%{name}", str(parameters[name]))

    return message
