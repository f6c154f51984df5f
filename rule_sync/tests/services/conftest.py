from unittest.mock import AsyncMock, Mock

import pytest

from rule_sync.models.rules import CommitResult, RemoteFile
from rule_sync.services.file_store import RemoteFileStore
from rule_sync.services.rule_editor import RuleSetEditor


@pytest.fixture
def mock_store() -> Mock:
    store = Mock(spec=RemoteFileStore)
    store.get = AsyncMock(return_value=RemoteFile(content="", revision_token=None))
    store.put = AsyncMock(side_effect=lambda path, *_: CommitResult(path=path, sha="new-sha"))
    return store


@pytest.fixture
def editor(mock_store: Mock) -> RuleSetEditor:
    return RuleSetEditor(mock_store)
