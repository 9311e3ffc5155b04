# =============================================================================
# core/client.py  —  Authenticated HTTP Adapter for the n8n REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps every outbound call to n8n:
#     - base URL   →  {N8N_URL}/api/v1
#     - auth       →  X-N8N-API-KEY header on every request
#     - timeout    →  fixed per request (30s by default), never retried
#     - bodies     →  JSON in, JSON out
#
# TWO WAYS TO CALL:
#   request()  →  returns the decoded body or RAISES N8nApiError
#   attempt()  →  returns an ApiResult and never raises for HTTP statuses
#                 (used by the handlers that have a fallback endpoint)
#
#   Transport failures (DNS, refused connection, timeout) always raise
#   N8nConnectionError, from both.
#
# TESTING:
#   Pass an httpx transport (e.g. httpx.MockTransport) to the constructor and
#   no real network is touched.
# =============================================================================

import json
import logging
from typing import Any, Optional

import httpx

from core.config import N8nConfig
from core.errors import N8nConnectionError
from core.models import ApiResult

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-N8N-API-KEY"


class N8nClient:
    """Thin async client for the n8n public API."""

    def __init__(self, config: N8nConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    def _open(self) -> httpx.AsyncClient:
        # One short-lived AsyncClient per request: tool calls share no state.
        return httpx.AsyncClient(
            base_url=self.config.api_url,
            headers={
                API_KEY_HEADER: self.config.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def attempt(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Any = None,
    ) -> ApiResult:
        """Send one request and report the outcome without raising on HTTP errors."""
        if params:
            params = {key: _query_value(value) for key, value in params.items()}

        if self.config.debug:
            logger.debug("→ %s %s params=%s body=%s", method, path, params, _preview(json_body))

        try:
            async with self._open() as client:
                response = await client.request(method, path, params=params, json=json_body)
        except httpx.TimeoutException as e:
            raise N8nConnectionError(
                f"Request to {method} {path} timed out after {self.config.timeout:g}s"
            ) from e
        except httpx.HTTPError as e:
            raise N8nConnectionError(f"Request to {method} {path} failed: {e}") from e

        body = _decode_body(response)
        if self.config.debug:
            logger.debug("← %s %s %s body=%s", response.status_code, method, path, _preview(body))

        return ApiResult(status=response.status_code, data=body, status_text=response.reason_phrase)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        """Send one request and return the decoded body.

        Raises:
            N8nApiError: the API answered with a non-2xx status.
            N8nConnectionError: no answer (network failure or timeout).
        """
        result = await self.attempt(method, path, params=params, json_body=json_body)
        return result.unwrap()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json_body: Any = None) -> Any:
        return await self.request("POST", path, json_body=json_body)

    async def put(self, path: str, json_body: Any = None) -> Any:
        return await self.request("PUT", path, json_body=json_body)

    async def patch(self, path: str, json_body: Any = None) -> Any:
        return await self.request("PATCH", path, json_body=json_body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _query_value(value: Any) -> Any:
    # n8n expects lowercase booleans in query strings.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _preview(payload: Any, limit: int = 2000) -> str:
    if payload is None:
        return "-"
    text = payload if isinstance(payload, str) else json.dumps(payload, default=str)
    return text if len(text) <= limit else text[:limit] + "…"
