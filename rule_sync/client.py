"""
Rule sync client facade.

This is the main entry point for users of the library. It wires the HTTP
client and services from one explicit configuration and exposes the
membership and editing operations.
"""

import asyncio
from collections.abc import Sequence
from typing import Self

import httpx
import structlog

from rule_sync.api.endpoints.contents import get_repository
from rule_sync.api.http_client import AsyncHttpClient
from rule_sync.api.proxy_control import ProxyControlClient
from rule_sync.config import RuleSyncConfig
from rule_sync.domain import canonicalize
from rule_sync.models.rules import CommitResult, DomainStatus, RepositoryInfo, RuleGroup
from rule_sync.services.file_store import RemoteFileStore
from rule_sync.services.rule_editor import RuleSetEditor
from rule_sync.services.status_aggregator import Sleep, StatusAggregator

logger = structlog.get_logger(__name__)


class RuleSyncClient:
    """
    Async client for rule files kept in a remote repository.

    Example:
        ```python
        config = RuleSyncConfig(token="...", owner="me", repo="rules", rule_groups=groups)
        async with RuleSyncClient(config) as client:
            statuses = await client.check_hostname("www.github.com")
            await client.add("direct.txt", "github.com")
        ```

    Args:
        config: Client configuration.
        transport: Optional httpx transport for testing (mock transport).
        proxy_transport: Optional httpx transport for the proxy controller.
        sleep: Timer used for the status check deadline.
    """

    def __init__(
        self,
        config: RuleSyncConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        proxy_transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._transport = transport
        self._proxy_transport = proxy_transport
        self._sleep = sleep

        self._http: AsyncHttpClient | None = None
        self._editor: RuleSetEditor | None = None
        self._aggregator: StatusAggregator | None = None

        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        """Enter async context."""
        await self._ensure_initialized()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def _ensure_initialized(self) -> None:
        async with self._init_lock:
            if self._initialized:
                return

            self._http = AsyncHttpClient(self._config, transport=self._transport)
            await self._http.__aenter__()

            self._editor = RuleSetEditor(RemoteFileStore(self._http))
            self._aggregator = StatusAggregator(self._editor, sleep=self._sleep)

            self._initialized = True
            logger.debug("Client initialized", owner=self._config.owner, repo=self._config.repo)

    async def close(self) -> None:
        """Close the client and release resources."""
        async with self._init_lock:
            if self._http:
                await self._http.__aexit__(None, None, None)
                self._http = None

            self._editor = None
            self._aggregator = None
            self._initialized = False
            logger.debug("Client closed")

    @property
    def rule_groups(self) -> tuple[RuleGroup, ...]:
        return self._config.rule_groups

    def _require_editor(self) -> RuleSetEditor:
        if self._editor is None:
            raise RuntimeError("Client not initialized. Use 'async with' first.")
        return self._editor

    async def exists(self, path: str, domain: str) -> bool:
        """
        Check whether a domain has a rule in one file.

        Raises:
            InvalidDomainError: If the domain cannot form a rule.
            TransportError: If the file cannot be read.
        """
        return await self._require_editor().exists(path, domain)

    async def add(self, path: str, domain: str) -> CommitResult:
        """
        Add a domain rule to one file.

        Raises:
            AlreadyExistsError: If the rule is already present.
            ConflictError: If the file changed concurrently.
            TransportError: For other remote failures.
        """
        return await self._require_editor().add(path, domain)

    async def remove(self, path: str, domain: str) -> CommitResult:
        """
        Remove a domain rule from one file.

        Raises:
            NotPresentError: If the rule is absent.
            ConflictError: If the file changed concurrently.
            TransportError: For other remote failures.
        """
        return await self._require_editor().remove(path, domain)

    async def check_all(
        self,
        domain: str,
        groups: Sequence[RuleGroup] | None = None,
        *,
        timeout: float | None = None,
    ) -> list[DomainStatus]:
        """
        Check a domain against rule groups in parallel.

        Args:
            domain: Canonical domain.
            groups: Groups to check; defaults to the configured ones.
            timeout: Overall deadline; defaults to ``config.check_timeout``.

        Raises:
            AggregateTimeoutError: If the checks did not finish in time.
            AggregateCheckError: If any check failed.
        """
        if self._aggregator is None:
            raise RuntimeError("Client not initialized. Use 'async with' first.")
        return await self._aggregator.check_all(
            self._config.rule_groups if groups is None else groups,
            domain,
            self._config.check_timeout if timeout is None else timeout,
        )

    async def check_hostname(self, hostname: str) -> list[DomainStatus]:
        """Canonicalize a hostname and check it against every configured group."""
        return await self.check_all(canonicalize(hostname))

    async def add_hostname(self, group_name: str, hostname: str) -> CommitResult:
        """
        Add the root domain of ``hostname`` to the named group.

        Raises:
            KeyError: If no group has that name.
        """
        return await self.add(self._config.group(group_name).path, canonicalize(hostname))

    async def remove_hostname(self, group_name: str, hostname: str) -> CommitResult:
        """
        Remove the root domain of ``hostname`` from the named group.

        Raises:
            KeyError: If no group has that name.
        """
        return await self.remove(self._config.group(group_name).path, canonicalize(hostname))

    async def verify_access(self) -> RepositoryInfo:
        """
        Check that the credential can reach the configured repository.

        Raises:
            NotFoundError: If the repository does not exist or is hidden.
            TransportError: If the credential is rejected.
        """
        if self._http is None:
            raise RuntimeError("Client not initialized. Use 'async with' first.")
        info = await get_repository(self._http)
        logger.info("Repository reachable", repo=info.full_name, can_push=info.can_push)
        return info

    async def reload_rule_provider(self, provider_name: str) -> None:
        """
        Tell the local proxy to reload a rule provider.

        Raises:
            RuntimeError: If no proxy controller is configured.
            ProxyControlError: If the controller rejects the request.
        """
        if not self._config.proxy_control_url:
            raise RuntimeError("No proxy controller configured")
        proxy = ProxyControlClient(
            self._config.proxy_control_url,
            self._config.proxy_control_secret,
            transport=self._proxy_transport,
        )
        await proxy.reload_rule_provider(provider_name)
