from __future__ import annotations

from datetime import UTC, datetime, timedelta

__all__ = [
    "ago",
    "now",
]


def ago(delta: timedelta) -> datetime:
    """Return an aware datetime that is `delta` in the past from now."""
    return now() - delta


def now() -> datetime:
    """Return an aware datetime."""
    return datetime.now(UTC)
