"""Content store API endpoints."""

from rule_sync.api.endpoints.contents import get_file, get_repository, put_file

__all__ = ["get_file", "get_repository", "put_file"]
