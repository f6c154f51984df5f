"""
Hostname canonicalization.

Maps a full hostname to the root-domain key used in rules. This is a small
fixed heuristic, not a public suffix list lookup.
"""

import re

_IPV4_PATTERN = re.compile(r"^\d+\.\d+\.\d+\.\d+$")
_FORBIDDEN_CHARS = re.compile(r"[\s,/]")

# Second-level public suffixes that need three labels to identify a site.
SECOND_LEVEL_SUFFIXES = frozenset(
    {
        "co.uk",
        "com.cn",
        "com.au",
        "co.jp",
        "co.kr",
        "com.br",
        "com.tw",
    }
)


def canonicalize(hostname: str) -> str:
    """
    Return the root-domain key for a hostname.

    IPv4 addresses and single-label hosts are returned unchanged. A bare
    two-label suffix such as ``co.uk`` is returned as is.

    Example:
        ```python
        canonicalize("www.github.com")      # "github.com"
        canonicalize("mail.example.co.uk")  # "example.co.uk"
        canonicalize("203.0.113.5")         # "203.0.113.5"
        ```
    """
    if _IPV4_PATTERN.match(hostname):
        return hostname

    parts = hostname.split(".")
    if len(parts) <= 1:
        return hostname

    last_two = ".".join(parts[-2:])
    if last_two in SECOND_LEVEL_SUFFIXES and len(parts) > 2:
        return ".".join(parts[-3:])
    return last_two


def is_valid_domain(domain: str) -> bool:
    """Check that a domain can be written as a single rule line."""
    return bool(domain) and _FORBIDDEN_CHARS.search(domain) is None
