"""Time helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_utc(value: datetime | None) -> str | None:
    """Serialise a timestamp for API responses, marking naive values as UTC."""

    if value is None:
        return None
    out = value.isoformat()
    if value.tzinfo is None:
        out += "Z"
    return out


__all__ = ["isoformat_utc", "utcnow"]
