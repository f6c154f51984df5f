"""
Settings normalization.

Turns the flat key/value settings the host stores into a RuleSyncConfig.
Older settings carried two fixed file fields (``directFile`` and
``proxyFile``); newer ones carry an ordered ``ruleGroups`` list. Both shapes
normalize to the same tuple of RuleGroup.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from rule_sync.config import DEFAULT_BRANCH, RuleSyncConfig
from rule_sync.exceptions import SettingsError
from rule_sync.models.rules import RuleGroup, RuleGroupType

logger = structlog.get_logger(__name__)

REQUIRED_KEYS = ("token", "owner", "repo")
LEGACY_DIRECT_FILE = "direct.txt"
LEGACY_PROXY_FILE = "proxy.txt"


def _text(settings: Mapping[str, Any], key: str) -> str:
    value = settings.get(key)
    return value.strip() if isinstance(value, str) else ""


def normalize_rule_groups(settings: Mapping[str, Any]) -> tuple[RuleGroup, ...]:
    """
    Build the rule group list from either settings shape.

    Args:
        settings: Raw settings mapping.

    Returns:
        Rule groups in display order.

    Raises:
        SettingsError: If a ``ruleGroups`` entry has no path.
    """
    raw_groups = settings.get("ruleGroups") or []
    if not raw_groups:
        logger.debug("Folding legacy rule file settings into rule groups")
        return (
            RuleGroup(
                name="Direct",
                path=_text(settings, "directFile") or LEGACY_DIRECT_FILE,
                type=RuleGroupType.DIRECT,
            ),
            RuleGroup(
                name="Proxy",
                path=_text(settings, "proxyFile") or LEGACY_PROXY_FILE,
                type=RuleGroupType.PROXY,
            ),
        )

    groups = []
    for index, entry in enumerate(raw_groups):
        path = _text(entry, "path")
        if not path:
            msg = f"Rule group #{index} has no path"
            raise SettingsError(msg)
        groups.append(
            RuleGroup(
                name=_text(entry, "name") or path,
                path=path,
                type=RuleGroupType.parse(entry.get("type")),
            )
        )
    return tuple(groups)


def config_from_settings(settings: Mapping[str, Any]) -> RuleSyncConfig:
    """
    Create a client configuration from stored settings.

    Raises:
        SettingsError: If token, owner or repo is missing.
    """
    missing = tuple(key for key in REQUIRED_KEYS if not _text(settings, key))
    if missing:
        msg = "Content store settings are incomplete"
        raise SettingsError(msg, missing=missing)

    return RuleSyncConfig(
        token=_text(settings, "token"),
        owner=_text(settings, "owner"),
        repo=_text(settings, "repo"),
        branch=_text(settings, "branch") or DEFAULT_BRANCH,
        rule_groups=normalize_rule_groups(settings),
        proxy_control_url=_text(settings, "proxyControlUrl") or None,
        proxy_control_secret=_text(settings, "proxyControlSecret"),
    )
