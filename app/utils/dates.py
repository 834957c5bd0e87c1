"""Timestamp helpers. All stored timestamps are naive UTC."""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Accepts a trailing ``Z`` and date-only strings (midnight). Returns None
    when the string is not a valid instant.
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    return to_naive_utc(parsed)
