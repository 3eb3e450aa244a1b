"""Time helpers shared by the store and the API layer."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_z(value: Optional[datetime]) -> Optional[str]:
    """Render a UTC datetime as ISO-8601 with a ``Z`` suffix.

    SQLite hands datetimes back without tzinfo, so naive values are taken to
    already be UTC.
    """

    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


__all__ = ["isoformat_z", "utcnow"]
