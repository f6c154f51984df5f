"""
Rule-related domain models.
"""

from dataclasses import dataclass
from enum import StrEnum

RULE_PREFIX = "DOMAIN-SUFFIX,"


class RuleGroupType(StrEnum):
    """Routing intent of a rule list."""

    DIRECT = "direct"
    PROXY = "proxy"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str | None) -> "RuleGroupType":
        """Parse a stored type, falling back to CUSTOM for unknown values."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.CUSTOM


@dataclass(frozen=True, kw_only=True)
class RuleGroup:
    """
    A named rule list stored as a plain-text file.

    Attributes:
        name: Display label.
        path: File path inside the content store.
        type: Routing intent of the list.
    """

    name: str
    path: str
    type: RuleGroupType = RuleGroupType.CUSTOM


@dataclass(frozen=True, kw_only=True)
class RemoteFile:
    """
    Decoded content of a remote file plus its revision token.

    A ``revision_token`` of None means the file does not exist yet.
    """

    content: str
    revision_token: str | None = None

    @property
    def exists(self) -> bool:
        return self.revision_token is not None


@dataclass(frozen=True, kw_only=True)
class DomainStatus:
    """Whether a domain is present in one rule group."""

    group: RuleGroup
    exists: bool


@dataclass(frozen=True, kw_only=True)
class CommitResult:
    """Confirmation of a successful write."""

    path: str
    sha: str | None = None  # New revision token of the file
    commit_sha: str | None = None


@dataclass(frozen=True, kw_only=True)
class RepositoryInfo:
    """Repository metadata used to verify access."""

    full_name: str
    default_branch: str
    can_push: bool = False
