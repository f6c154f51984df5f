"""
Content store client layer.

Provides async HTTP communication with the content store API and the
local proxy controller.
"""

from rule_sync.api.http_client import AsyncHttpClient, sanitize_for_log
from rule_sync.api.proxy_control import ProxyControlClient

__all__ = ["AsyncHttpClient", "ProxyControlClient", "sanitize_for_log"]
