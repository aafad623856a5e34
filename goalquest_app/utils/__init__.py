"""Shared helpers used across GoalQuest modules."""

from .time_utils import ensure_utc, isoformat_or_none, utcnow

__all__ = ["ensure_utc", "isoformat_or_none", "utcnow"]
