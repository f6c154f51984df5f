"""
Async HTTP client for the content store API.

Provides a clean interface for making API requests with authentication,
cache busting, and mapping of HTTP failures onto the exception hierarchy.
No request is ever retried.
"""

import asyncio
import time
from collections.abc import Callable
from typing import Any

import httpx
import structlog

from rule_sync.config import RuleSyncConfig
from rule_sync.exceptions import ConflictError, NotFoundError, TransportError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "Authorization",
        "content",
        "token",
        "secret",
    }
)

# 422 bodies that mean the revision token no longer matches.
_STALE_SHA_MARKERS = ("sha", "does not match")


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive or bulky fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def _millis() -> str:
    return str(time.time_ns() // 1_000_000)


class AsyncHttpClient:
    """Async HTTP client for the content store API."""

    def __init__(
        self,
        config: RuleSyncConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        nonce: Callable[[], str] | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
            nonce: Produces the cache-busting query value. Defaults to the
                current time in milliseconds.
        """
        self._config = config
        self._transport = transport
        self._nonce = nonce or _millis

        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self._config.api_url,
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={
                        "Accept": "application/vnd.github.v3+json",
                        "Authorization": f"token {self._config.token}",
                        "User-Agent": self._config.user_agent,
                    },
                )
        return self._client

    async def _close(self) -> None:
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    @property
    def config(self) -> RuleSyncConfig:
        return self._config

    def repo_endpoint(self, suffix: str = "") -> str:
        """Build an endpoint under the configured repository."""
        base = f"/repos/{self._config.owner}/{self._config.repo}"
        return f"{base}/{suffix.lstrip('/')}" if suffix else base

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        bust_cache: bool = False,
    ) -> dict[str, Any]:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, PUT, etc.).
            endpoint: API endpoint (e.g., "/repos/o/r/contents/direct.txt").
            json: JSON body for PUT requests.
            params: Query parameters.
            bust_cache: Add a no-cache header and a unique query value so
                intermediate caches cannot serve a stale response.

        Returns:
            Response JSON data.

        Raises:
            NotFoundError: If the resource does not exist.
            ConflictError: If a conditional write used a stale revision token.
            TransportError: For any other failure, including network errors.
        """
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        params = dict(params or {})
        headers = {}
        if bust_cache:
            params["_"] = self._nonce()
            headers["Cache-Control"] = "no-cache"

        if json is not None:
            logger.debug(
                "Sending request", method=method, endpoint=endpoint, body=sanitize_for_log(json)
            )

        try:
            response = await self._client.request(
                method=method,
                url=endpoint,
                json=json,
                params=params or None,
                headers=headers,
            )
        except httpx.HTTPError as e:
            msg = f"Request failed: {e}"
            raise TransportError(msg, endpoint=endpoint) from e

        if not response.is_success:
            self._raise_api_error(response, endpoint)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Invalid JSON response from API",
                status=response.status_code,
                endpoint=endpoint,
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"{response.status_code} {response.reason_phrase}".strip()

    @classmethod
    def _raise_api_error(cls, response: httpx.Response, endpoint: str) -> None:
        status = response.status_code
        error_msg = cls._error_message(response)

        if status == httpx.codes.NOT_FOUND:
            raise NotFoundError(error_msg, endpoint=endpoint)
        if status in (httpx.codes.CONFLICT, httpx.codes.PRECONDITION_FAILED):
            raise ConflictError(error_msg, status=status, endpoint=endpoint)
        if status == httpx.codes.UNPROCESSABLE_ENTITY and any(
            marker in error_msg.lower() for marker in _STALE_SHA_MARKERS
        ):
            raise ConflictError(error_msg, status=status, endpoint=endpoint)

        raise TransportError(error_msg, status=status, endpoint=endpoint)
