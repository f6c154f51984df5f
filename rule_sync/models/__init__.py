"""
Domain models for rule sync.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from rule_sync.models.rules import (
    RULE_PREFIX,
    CommitResult,
    DomainStatus,
    RemoteFile,
    RepositoryInfo,
    RuleGroup,
    RuleGroupType,
)

__all__ = [
    "RULE_PREFIX",
    "CommitResult",
    "DomainStatus",
    "RemoteFile",
    "RepositoryInfo",
    "RuleGroup",
    "RuleGroupType",
]
