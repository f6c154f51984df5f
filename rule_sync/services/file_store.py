"""
Remote file store.

Reads and conditionally writes text files in the content store. The
revision token returned by ``get`` is the only concurrency guard: ``put``
succeeds only if the file is still at that revision.
"""

import httpx
import structlog

from rule_sync import codec
from rule_sync.api.endpoints.contents import contents_endpoint, get_file, put_file
from rule_sync.api.http_client import AsyncHttpClient
from rule_sync.exceptions import NotFoundError, TransportError
from rule_sync.models.rules import CommitResult, RemoteFile

logger = structlog.get_logger(__name__)


class RemoteFileStore:
    """Service for reading and writing rule files. Nothing is cached."""

    def __init__(self, http: AsyncHttpClient) -> None:
        """
        Args:
            http: Async HTTP client bound to a repository and branch.
        """
        self._http = http

    async def get(self, path: str) -> RemoteFile:
        """
        Fetch and decode a file.

        A missing file is not an error: it comes back as empty content with
        no revision token.

        Raises:
            TransportError: For any failure other than absence, including a
                path that is not a file or content that cannot be decoded
                losslessly.
        """
        try:
            data = await get_file(self._http, path)
        except NotFoundError:
            logger.debug("Rule file does not exist yet", path=path)
            return RemoteFile(content="", revision_token=None)

        content = self._decode(path, data)
        revision_token = data.get("sha")
        logger.debug("Fetched rule file", path=path, sha=revision_token, size=len(content))
        return RemoteFile(content=content, revision_token=revision_token)

    def _decode(self, path: str, data: object) -> str:
        endpoint = contents_endpoint(self._http, path)
        if not isinstance(data, dict):
            msg = f"{path} is not a file"
            raise TransportError(msg, status=httpx.codes.OK, endpoint=endpoint)
        if data.get("encoding") != "base64" or not isinstance(data.get("content"), str):
            msg = f"{path} content is not available inline (encoding={data.get('encoding')!r})"
            raise TransportError(msg, status=httpx.codes.OK, endpoint=endpoint)
        try:
            return codec.decode(data["content"], errors="strict")
        except ValueError as e:
            msg = f"{path} content is not valid base64 UTF-8 text"
            raise TransportError(msg, status=httpx.codes.OK, endpoint=endpoint) from e

    async def put(
        self,
        path: str,
        content: str,
        revision_token: str | None,
        commit_message: str,
    ) -> CommitResult:
        """
        Write a file, creating it when ``revision_token`` is None.

        Raises:
            ConflictError: If ``revision_token`` is stale or the file was
                created by someone else in the meantime.
            TransportError: For any other failure.
        """
        result = await put_file(
            self._http,
            path,
            codec.encode(content),
            commit_message,
            sha=revision_token,
        )
        logger.info(
            "Committed rule file",
            path=path,
            previous_sha=revision_token,
            sha=result.sha,
            commit=result.commit_sha,
        )
        return result
