"""
Centralized Utilities for Time Handling in GoalQuest.
Goal: Ensure consistent UTC storage and comparisons.
"""
from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Get the current timezone-aware UTC datetime.
    Always use this instead of datetime.utcnow() or datetime.now().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Return ``dt`` as an aware UTC datetime.

    SQLite drops tzinfo on the way back from the database, so naive values
    are treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def isoformat_or_none(value) -> Optional[str]:
    """Serialize a date/datetime for JSON, passing None through."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
