"""
Rule sync exception hierarchy.

All exceptions inherit from RuleSyncError for easy catching. Each failure
kind is its own class so callers can build a friendly message without
parsing error text.
"""

from typing import Any


class RuleSyncError(Exception):
    """Base exception for all rule_sync errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class SettingsError(RuleSyncError):
    """Stored settings are incomplete or malformed."""

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message, missing=missing)
        self.missing = missing


class InvalidDomainError(RuleSyncError):
    """Domain is empty or cannot be written as a rule."""

    def __init__(self, message: str, *, domain: str) -> None:
        super().__init__(message, domain=domain)
        self.domain = domain


class RuleError(RuleSyncError):
    """Rule membership precondition failed; no write was performed."""

    def __init__(self, message: str, *, domain: str, path: str) -> None:
        super().__init__(message, domain=domain, path=path)
        self.domain = domain
        self.path = path


class AlreadyExistsError(RuleError):
    """Domain is already present in the rule file."""


class NotPresentError(RuleError):
    """Domain is not present in the rule file."""


class TransportError(RuleSyncError):
    """Remote request failed (network, auth, permission, server)."""

    def __init__(
        self, message: str, *, status: int | None = None, endpoint: str | None = None
    ) -> None:
        super().__init__(message, status=status, endpoint=endpoint)
        self.status = status
        self.endpoint = endpoint


class NotFoundError(TransportError):
    """Resource not found in the content store."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, status=404, endpoint=endpoint)


class ConflictError(TransportError):
    """Revision token is stale; the file changed since it was read."""

    def __init__(self, message: str, *, status: int = 409, endpoint: str | None = None) -> None:
        super().__init__(message, status=status, endpoint=endpoint)


class ProxyControlError(TransportError):
    """Proxy controller rejected or failed a request."""


class AggregateCheckError(RuleSyncError):
    """A status fan-out did not produce a complete result."""

    def __init__(self, message: str, *, domain: str, groups: int) -> None:
        super().__init__(message, domain=domain, groups=groups)
        self.domain = domain
        self.groups = groups


class AggregateTimeoutError(AggregateCheckError):
    """The status fan-out did not settle before its deadline."""

    def __init__(self, message: str, *, domain: str, groups: int, timeout: float) -> None:
        super().__init__(message, domain=domain, groups=groups)
        self.context["timeout"] = timeout
        self.timeout = timeout
