from __future__ import annotations

import re

__all__ = ["normalize"]

_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-{2,}")
_WHITESPACE = re.compile(r"\s")


def normalize(name: str | None) -> str | None:
    """
    Converts a human-readable name to a URL-safe slug.

    Leading and trailing whitespace is dropped, the name is lower-cased, whitespace
    becomes a hyphen, anything outside of [a-z0-9-] is removed, runs of hyphens are
    collapsed and hyphens are stripped from both ends.

    Examples:
        >>> normalize("  My Team!! ")
        'my-team'
        >>> normalize("!!!") is None
        True

    Returns:
        str | None: A slug, or None if nothing is left of the name.
    """
    if name is None:
        return None

    slug = _WHITESPACE.sub("-", name.strip().lower())
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHENS.sub("-", slug).strip("-")
    return slug or None
