from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from rule_sync.api.http_client import AsyncHttpClient
from rule_sync.config import RuleSyncConfig
from rule_sync.models.rules import RuleGroup, RuleGroupType
from rule_sync.tests.utils.fake_store import BRANCH, OWNER, REPO, FakeContentStore

DIRECT = RuleGroup(name="Direct", path="direct.txt", type=RuleGroupType.DIRECT)
PROXY = RuleGroup(name="Proxy", path="proxy.txt", type=RuleGroupType.PROXY)
STREAMING = RuleGroup(name="Streaming", path="lists/streaming.txt")


@pytest.fixture
def config() -> RuleSyncConfig:
    return RuleSyncConfig(
        token="test-token",
        owner=OWNER,
        repo=REPO,
        branch=BRANCH,
        api_url="https://api.test",
        rule_groups=(DIRECT, PROXY, STREAMING),
    )


@pytest.fixture
def fake_store() -> FakeContentStore:
    return FakeContentStore(
        {
            "direct.txt": "DOMAIN-SUFFIX,github.com\nDOMAIN-SUFFIX,example.co.uk\n",
            "proxy.txt": "DOMAIN-SUFFIX,google.com\n",
        }
    )


@pytest_asyncio.fixture
async def store_http(
    config: RuleSyncConfig, fake_store: FakeContentStore
) -> AsyncIterator[AsyncHttpClient]:
    async with AsyncHttpClient(config, transport=fake_store, nonce=lambda: "1700000000000") as http:
        yield http
