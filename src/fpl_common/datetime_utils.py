"""Datetime utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def to_iso(value: str | datetime | date | None) -> str | None:
    """Normalise a DB timestamp (TEXT or TIMESTAMPTZ) to an ISO 8601 string."""
    if value is None or value == "":
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
