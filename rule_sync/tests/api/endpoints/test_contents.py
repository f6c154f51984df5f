from unittest.mock import Mock

import pytest

from rule_sync.api.endpoints.contents import (
    contents_endpoint,
    get_file,
    get_repository,
    put_file,
)


def test_contents_endpoint_quotes_path(mock_http: Mock) -> None:
    endpoint = contents_endpoint(mock_http, "/lists/my rules.txt")

    assert endpoint == "/repos/octo/rules/contents/lists/my%20rules.txt"


@pytest.mark.asyncio
async def test_get_file_reads_branch_without_cache(mock_http: Mock) -> None:
    mock_http.request.return_value = {"content": "YQ==\n", "sha": "abc"}

    data = await get_file(mock_http, "direct.txt")

    assert data["sha"] == "abc"
    mock_http.request.assert_awaited_once_with(
        "GET",
        "/repos/octo/rules/contents/direct.txt",
        params={"ref": "main"},
        bust_cache=True,
    )


@pytest.mark.asyncio
async def test_put_file_with_sha_replaces_revision(mock_http: Mock) -> None:
    mock_http.request.return_value = {
        "content": {"path": "direct.txt", "sha": "new-sha"},
        "commit": {"sha": "commit-sha"},
    }

    result = await put_file(mock_http, "direct.txt", "ZW5jb2RlZA==", "Add a.com", sha="old-sha")

    assert result.path == "direct.txt"
    assert result.sha == "new-sha"
    assert result.commit_sha == "commit-sha"
    mock_http.request.assert_awaited_once_with(
        "PUT",
        "/repos/octo/rules/contents/direct.txt",
        json={
            "message": "Add a.com",
            "content": "ZW5jb2RlZA==",
            "branch": "main",
            "sha": "old-sha",
        },
    )


@pytest.mark.asyncio
async def test_put_file_without_sha_creates_file(mock_http: Mock) -> None:
    await put_file(mock_http, "new.txt", "eA==", "Add x.com")

    body = mock_http.request.await_args.kwargs["json"]
    assert "sha" not in body


@pytest.mark.asyncio
async def test_put_file_tolerates_sparse_response(mock_http: Mock) -> None:
    result = await put_file(mock_http, "new.txt", "eA==", "Add x.com")

    assert result.sha is None
    assert result.commit_sha is None


@pytest.mark.asyncio
async def test_get_repository_parses_permissions(mock_http: Mock) -> None:
    mock_http.request.return_value = {
        "full_name": "octo/rules",
        "default_branch": "main",
        "permissions": {"admin": False, "push": True, "pull": True},
    }

    info = await get_repository(mock_http)

    assert info.full_name == "octo/rules"
    assert info.default_branch == "main"
    assert info.can_push is True
    mock_http.request.assert_awaited_once_with("GET", "/repos/octo/rules", bust_cache=True)
