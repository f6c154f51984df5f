import pytest

from rule_sync.config import RuleSyncConfig
from rule_sync.exceptions import SettingsError
from rule_sync.models.rules import RuleGroup, RuleGroupType
from rule_sync.settings import config_from_settings, normalize_rule_groups

BASE_SETTINGS = {"token": " ghp_x ", "owner": "octo", "repo": "rules"}


def test_normalize_rule_groups_folds_legacy_fields() -> None:
    groups = normalize_rule_groups({"directFile": "d.list", "proxyFile": "p.list"})

    assert groups == (
        RuleGroup(name="Direct", path="d.list", type=RuleGroupType.DIRECT),
        RuleGroup(name="Proxy", path="p.list", type=RuleGroupType.PROXY),
    )


def test_normalize_rule_groups_uses_legacy_defaults() -> None:
    groups = normalize_rule_groups({})

    assert [g.path for g in groups] == ["direct.txt", "proxy.txt"]


def test_normalize_rule_groups_prefers_rule_groups_list() -> None:
    settings = {
        "directFile": "ignored.txt",
        "ruleGroups": [
            {"name": "Streaming", "path": "streaming.txt", "type": "proxy"},
            {"name": "LAN", "path": "lan.txt", "type": "bogus"},
            {"path": "misc.txt"},
        ],
    }

    groups = normalize_rule_groups(settings)

    assert groups == (
        RuleGroup(name="Streaming", path="streaming.txt", type=RuleGroupType.PROXY),
        RuleGroup(name="LAN", path="lan.txt", type=RuleGroupType.CUSTOM),
        RuleGroup(name="misc.txt", path="misc.txt", type=RuleGroupType.CUSTOM),
    )


def test_normalize_rule_groups_rejects_entry_without_path() -> None:
    with pytest.raises(SettingsError, match="#1"):
        normalize_rule_groups({"ruleGroups": [{"path": "a.txt"}, {"name": "B"}]})


def test_config_from_settings_trims_and_defaults_branch() -> None:
    config = config_from_settings({**BASE_SETTINGS, "branch": "  "})

    assert config.token == "ghp_x"
    assert config.branch == "main"
    assert config.proxy_control_url is None
    assert [g.name for g in config.rule_groups] == ["Direct", "Proxy"]


def test_config_from_settings_reads_proxy_controller() -> None:
    config = config_from_settings(
        {
            **BASE_SETTINGS,
            "proxyControlUrl": "http://127.0.0.1:9090",
            "proxyControlSecret": "s3cret",
        }
    )

    assert config.proxy_control_url == "http://127.0.0.1:9090"
    assert config.proxy_control_secret == "s3cret"


def test_config_from_settings_reports_missing_keys() -> None:
    with pytest.raises(SettingsError) as exc_info:
        config_from_settings({"token": "x", "repo": " "})

    assert exc_info.value.missing == ("owner", "repo")


def test_config_rejects_non_positive_check_timeout() -> None:
    with pytest.raises(ValueError, match="check_timeout"):
        RuleSyncConfig(token="t", owner="o", repo="r", check_timeout=0)


def test_config_rejects_duplicate_group_paths() -> None:
    groups = (RuleGroup(name="A", path="a.txt"), RuleGroup(name="B", path="a.txt"))

    with pytest.raises(ValueError, match="duplicate rule group path"):
        RuleSyncConfig(token="t", owner="o", repo="r", rule_groups=groups)


def test_config_group_lookup_by_name() -> None:
    group = RuleGroup(name="A", path="a.txt")
    config = RuleSyncConfig(token="t", owner="o", repo="r", rule_groups=(group,))

    assert config.group("A") is group
    with pytest.raises(KeyError):
        config.group("missing")
