"""UTC datetime utilities."""

from collections.abc import Callable
from datetime import datetime, timezone

# Returns the current time as unsigned epoch seconds
Clock = Callable[[], int]


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def epoch_now() -> int:
    """Current UTC time as integer epoch seconds."""
    return int(utc_now().timestamp())


def epoch_to_iso(ts: int) -> str:
    """ISO-8601 UTC string, or "" when ts is outside the platform datetime range."""
    try:
        return datetime.fromtimestamp(ts, timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return ""
