"""
Client for a local proxy controller.

After a rule file changes, the running proxy can be told to reload the rule
provider backed by that file.
"""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from rule_sync.exceptions import ProxyControlError

logger = structlog.get_logger(__name__)


class ProxyControlClient:
    """Async client for the proxy controller's rule provider API."""

    def __init__(
        self,
        api_url: str,
        secret: str = "",
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            api_url: Controller base URL, e.g. "http://127.0.0.1:9090".
            secret: Optional bearer secret.
            timeout: Request timeout in seconds.
            transport: Optional transport for testing (mock transport).
        """
        self._api_url = api_url.rstrip("/")
        self._secret = secret
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if self._secret:
            return {"Authorization": f"Bearer {self._secret}"}
        return {}

    async def _request(self, method: str, endpoint: str) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._api_url,
            timeout=self._timeout,
            transport=self._transport,
            headers=self._headers(),
        ) as client:
            try:
                response = await client.request(method, endpoint)
            except httpx.HTTPError as e:
                msg = f"Proxy controller unreachable: {e}"
                raise ProxyControlError(msg, endpoint=endpoint) from e

        if not response.is_success:
            msg = f"Proxy controller request failed: {response.status_code}"
            raise ProxyControlError(msg, status=response.status_code, endpoint=endpoint)
        return response

    async def reload_rule_provider(self, provider_name: str) -> None:
        """
        Ask the proxy to refetch one rule provider.

        Raises:
            ProxyControlError: If the controller rejects the request.
        """
        await self._request("PUT", f"/providers/rules/{quote(provider_name, safe='')}")
        logger.info("Rule provider reloaded", provider=provider_name)

    async def get_version(self) -> dict[str, Any]:
        """Get the controller version, useful as a connectivity check."""
        response = await self._request("GET", "/version")
        try:
            return response.json()
        except ValueError as e:
            msg = "Invalid JSON response from proxy controller"
            raise ProxyControlError(msg, status=response.status_code, endpoint="/version") from e
