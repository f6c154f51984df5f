"""
Rule file sync client.

An async Python client that keeps ``DOMAIN-SUFFIX`` rule lists in a remote
repository: check which lists contain a site's root domain, and add or
remove it with optimistic concurrency.

Example:
    ```python
    from rule_sync import RuleSyncClient, config_from_settings

    config = config_from_settings(stored_settings)

    async with RuleSyncClient(config) as client:
        for status in await client.check_hostname("www.github.com"):
            print(status.group.name, status.exists)

        await client.add_hostname("Direct", "www.github.com")
    ```
"""

from rule_sync.client import RuleSyncClient
from rule_sync.config import RuleSyncConfig
from rule_sync.domain import canonicalize
from rule_sync.exceptions import (
    AggregateCheckError,
    AggregateTimeoutError,
    AlreadyExistsError,
    ConflictError,
    InvalidDomainError,
    NotFoundError,
    NotPresentError,
    ProxyControlError,
    RuleError,
    RuleSyncError,
    SettingsError,
    TransportError,
)
from rule_sync.models.rules import (
    CommitResult,
    DomainStatus,
    RemoteFile,
    RepositoryInfo,
    RuleGroup,
    RuleGroupType,
)
from rule_sync.settings import config_from_settings, normalize_rule_groups

__version__ = "0.1.0"

__all__ = [
    # Main client
    "RuleSyncClient",
    "RuleSyncConfig",
    "config_from_settings",
    "normalize_rule_groups",
    "canonicalize",
    # Models
    "CommitResult",
    "DomainStatus",
    "RemoteFile",
    "RepositoryInfo",
    "RuleGroup",
    "RuleGroupType",
    # Exceptions
    "RuleSyncError",
    "SettingsError",
    "InvalidDomainError",
    "RuleError",
    "AlreadyExistsError",
    "NotPresentError",
    "TransportError",
    "NotFoundError",
    "ConflictError",
    "ProxyControlError",
    "AggregateCheckError",
    "AggregateTimeoutError",
]
