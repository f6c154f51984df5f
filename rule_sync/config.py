"""
Rule sync client configuration.
"""

from dataclasses import dataclass

from rule_sync.models.rules import RuleGroup

DEFAULT_BRANCH = "main"


@dataclass(frozen=True, kw_only=True)
class RuleSyncConfig:
    """
    Attributes:
        token: Content store access token.
        owner: Owner (user or organization) of the repository.
        repo: Repository holding the rule files.
        branch: Branch used for reads and commits.
        api_url: Base URL of the content store API.
        timeout: Request timeout in seconds.
        check_timeout: Overall deadline for a status fan-out in seconds.
        user_agent: User-Agent header value.
        rule_groups: Rule lists in display order.
        proxy_control_url: Base URL of a local proxy controller, if any.
        proxy_control_secret: Bearer secret for the proxy controller.
    """

    token: str
    owner: str
    repo: str
    branch: str = DEFAULT_BRANCH
    api_url: str = "https://api.github.com"
    timeout: float = 30.0
    check_timeout: float = 10.0
    user_agent: str = "rule-sync/0.1.0"
    rule_groups: tuple[RuleGroup, ...] = ()
    proxy_control_url: str | None = None
    proxy_control_secret: str = ""

    def __post_init__(self) -> None:
        for name in ("token", "owner", "repo", "branch"):
            if not getattr(self, name).strip():
                msg = f"{name} must not be empty"
                raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.check_timeout <= 0:
            msg = "check_timeout must be positive"
            raise ValueError(msg)
        self._validate_rule_groups()

    def _validate_rule_groups(self) -> None:
        names: set[str] = set()
        paths: set[str] = set()
        for group in self.rule_groups:
            if not group.name.strip() or not group.path.strip():
                msg = "rule group name and path must not be empty"
                raise ValueError(msg)
            if group.name in names:
                msg = f"duplicate rule group name: {group.name}"
                raise ValueError(msg)
            if group.path in paths:
                msg = f"duplicate rule group path: {group.path}"
                raise ValueError(msg)
            names.add(group.name)
            paths.add(group.path)

    def group(self, name: str) -> RuleGroup:
        """
        Look up a configured rule group by name.

        Raises:
            KeyError: If no group has that name.
        """
        for group in self.rule_groups:
            if group.name == name:
                return group
        raise KeyError(name)
