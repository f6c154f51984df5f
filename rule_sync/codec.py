"""
Rule file codec.

Converts between the content store's base64 transport encoding and decoded
text, and edits the rule lines inside that text. None of these functions
raise on well-formed input; lines are split on line feeds only.
"""

import base64

from rule_sync.models.rules import RULE_PREFIX


def decode(transport_content: str, *, errors: str = "replace") -> str:
    """
    Decode base64 transport content into text.

    The store wraps base64 payloads across lines, so all whitespace is
    stripped before decoding. Pass ``errors="strict"`` when the text will be
    written back, so bytes that are not UTF-8 raise instead of being replaced.

    Raises:
        ValueError: If the base64 is malformed, or the bytes are not UTF-8
            and ``errors`` is "strict".
    """
    compact = "".join(transport_content.split())
    return base64.b64decode(compact).decode("utf-8", errors=errors)


def encode(content: str) -> str:
    """Encode text as UTF-8 then base64 for transport."""
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


def rule_line(domain: str) -> str:
    return f"{RULE_PREFIX}{domain}"


def iter_rules(content: str) -> list[str]:
    """Return the logical rule lines, trimmed, with blank lines dropped."""
    return [line.strip() for line in content.split("\n") if line.strip()]


def has_rule(content: str, domain: str) -> bool:
    """True iff a trimmed line equals the rule for ``domain`` exactly."""
    rule = rule_line(domain)
    return any(line.strip() == rule for line in content.split("\n"))


def append_rule(content: str, domain: str) -> str:
    """
    Append the rule for ``domain``.

    A separating newline is added only when the content is non-empty and
    lacks one. The result ends with exactly one newline.
    """
    if content and not content.endswith("\n"):
        content += "\n"
    return f"{content}{rule_line(domain)}\n"


def remove_rule(content: str, domain: str) -> str:
    """
    Remove every line equal to the rule for ``domain``.

    Blank lines are dropped as well. Lines are split on line feeds only, so
    a kept line keeps its own carriage return. The result ends with exactly
    one newline, or is empty when no lines remain.
    """
    rule = rule_line(domain)
    kept = [line for line in content.split("\n") if line.strip() not in (rule, "")]
    if not kept:
        return ""
    return "\n".join(kept) + "\n"
