"""Find @username mentions in pre-render text."""

import re
from typing import Iterable

# A mention must follow whitespace, so "@name" at offset 0 or inside an
# email address is not picked up. Usernames are ASCII only.
SCAN_PATTERN = re.compile(r"\s@(\w[\w-]*)", re.ASCII)


def scan_usernames(text: str | None) -> list[str]:
    """Return the usernames mentioned in `text`, in order of first appearance.

    Example:
        >>> scan_usernames("cc @alice, @bob and @alice")
        ['alice', 'bob']
        >>> scan_usernames(None)
        []
    """
    if text is None:
        return []
    return merge_usernames([], SCAN_PATTERN.findall(text))


def merge_usernames(existing: list[str] | None, found: Iterable[str]) -> list[str]:
    """Append the names in `found` that `existing` does not hold yet.

    Existing entries keep their order and are never removed. Returns a new list.
    """
    merged = list(existing or [])
    for name in found:
        if name not in merged:
            merged.append(name)
    return merged
