from unittest.mock import AsyncMock, Mock

import pytest

from rule_sync.api.http_client import AsyncHttpClient
from rule_sync.config import RuleSyncConfig


@pytest.fixture
def mock_http(config: RuleSyncConfig) -> Mock:
    http = Mock(spec=AsyncHttpClient)
    http.config = config
    http.repo_endpoint.side_effect = AsyncHttpClient(config).repo_endpoint
    http.request = AsyncMock(return_value={})
    return http
