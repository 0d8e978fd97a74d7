"""Timestamp helpers. Everything is stored as naive UTC."""
from datetime import datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def blank_to_none(value: Any) -> Any:
    """Map empty strings, 0 and False to None so they clear a date."""
    if isinstance(value, str):
        return value if value.strip() else None
    if value is False or (isinstance(value, (int, float)) and value == 0):
        return None
    return value


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_utc_iso(value: datetime) -> str:
    """ISO 8601 with an explicit Z so clients never read it as local time."""
    return to_naive_utc(value).isoformat() + "Z"
