"""Repository contents endpoints (read file, write file, repository info)."""

from typing import Any
from urllib.parse import quote

from rule_sync.api.http_client import AsyncHttpClient
from rule_sync.models.rules import CommitResult, RepositoryInfo


def contents_endpoint(http: AsyncHttpClient, path: str) -> str:
    return http.repo_endpoint(f"contents/{quote(path.lstrip('/'))}")


async def get_file(http: AsyncHttpClient, path: str) -> dict[str, Any]:
    """
    Get a file's transport-encoded content and revision sha.

    Always bypasses intermediate caches so a read that follows another
    writer's commit observes it.
    """
    return await http.request(
        "GET",
        contents_endpoint(http, path),
        params={"ref": http.config.branch},
        bust_cache=True,
    )


async def put_file(
    http: AsyncHttpClient,
    path: str,
    encoded_content: str,
    message: str,
    sha: str | None = None,
) -> CommitResult:
    """
    Create or conditionally replace a file.

    Args:
        http: Configured async HTTP client.
        path: File path in the repository.
        encoded_content: Base64 content.
        message: Commit message.
        sha: Revision being replaced, or None to create the file.

    Returns:
        The new file and commit revisions.
    """
    body: dict[str, Any] = {
        "message": message,
        "content": encoded_content,
        "branch": http.config.branch,
    }
    if sha is not None:
        body["sha"] = sha

    response = await http.request("PUT", contents_endpoint(http, path), json=body)
    return CommitResult(
        path=path,
        sha=(response.get("content") or {}).get("sha"),
        commit_sha=(response.get("commit") or {}).get("sha"),
    )


async def get_repository(http: AsyncHttpClient) -> RepositoryInfo:
    """Get repository metadata for the configured owner and repo."""
    response = await http.request("GET", http.repo_endpoint(), bust_cache=True)
    permissions = response.get("permissions") or {}
    return RepositoryInfo(
        full_name=response.get("full_name", ""),
        default_branch=response.get("default_branch", ""),
        can_push=bool(permissions.get("push", False)),
    )
