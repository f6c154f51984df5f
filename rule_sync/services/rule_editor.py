"""
Rule set editing.

Each operation reads the file fresh, decides, and performs at most one
conditional write. Conflicts and transport failures propagate unchanged;
nothing is retried.
"""

import structlog

from rule_sync import codec
from rule_sync.domain import is_valid_domain
from rule_sync.exceptions import AlreadyExistsError, InvalidDomainError, NotPresentError
from rule_sync.models.rules import CommitResult
from rule_sync.services.file_store import RemoteFileStore

logger = structlog.get_logger(__name__)


def _require_valid(domain: str) -> None:
    if not is_valid_domain(domain):
        msg = f"Invalid domain: {domain!r}"
        raise InvalidDomainError(msg, domain=domain)


class RuleSetEditor:
    """Read-modify-write of ``DOMAIN-SUFFIX`` rules in remote files."""

    def __init__(self, store: RemoteFileStore) -> None:
        """
        Args:
            store: Remote file store used for every read and write.
        """
        self._store = store

    async def exists(self, path: str, domain: str) -> bool:
        """
        Check whether ``domain`` has a rule in the file at ``path``.

        Raises:
            InvalidDomainError: If the domain cannot form a rule.
            TransportError: If the file cannot be read.
        """
        _require_valid(domain)
        remote = await self._store.get(path)
        return codec.has_rule(remote.content, domain)

    async def add(self, path: str, domain: str) -> CommitResult:
        """
        Append a rule for ``domain``.

        Returns:
            The commit confirmation.

        Raises:
            InvalidDomainError: If the domain cannot form a rule.
            AlreadyExistsError: If the rule is present; nothing is written.
            ConflictError: If the file changed between read and write.
            TransportError: For any other remote failure.
        """
        _require_valid(domain)
        remote = await self._store.get(path)
        if codec.has_rule(remote.content, domain):
            msg = f"{domain} is already in {path}"
            raise AlreadyExistsError(msg, domain=domain, path=path)

        new_content = codec.append_rule(remote.content, domain)
        logger.debug("Adding rule", path=path, domain=domain, sha=remote.revision_token)
        return await self._store.put(
            path, new_content, remote.revision_token, f"Add {domain} to {path}"
        )

    async def remove(self, path: str, domain: str) -> CommitResult:
        """
        Remove every rule for ``domain``. Blank lines are dropped too.

        Returns:
            The commit confirmation.

        Raises:
            InvalidDomainError: If the domain cannot form a rule.
            NotPresentError: If the rule is absent; nothing is written.
            ConflictError: If the file changed between read and write.
            TransportError: For any other remote failure.
        """
        _require_valid(domain)
        remote = await self._store.get(path)
        if not codec.has_rule(remote.content, domain):
            msg = f"{domain} is not in {path}"
            raise NotPresentError(msg, domain=domain, path=path)

        new_content = codec.remove_rule(remote.content, domain)
        logger.debug("Removing rule", path=path, domain=domain, sha=remote.revision_token)
        return await self._store.put(
            path, new_content, remote.revision_token, f"Remove {domain} from {path}"
        )
