"""
Stats Logic - Aggregate XP figures over one owner's records.

This module contains ONLY pure Python logic.
NO database, NO Flask, NO model dependencies allowed.

Records are read through attributes only (``xp_earned``, ``completed``,
``updated_at``, ``last_completed_date``), so any GoalRecord-like object works.
"""
from datetime import datetime, timedelta
from typing import Iterable, List

from ..constants import LEVEL_SPAN_XP
from ..schemas import CompletionEvent, PlayerStats
from .level_logic import compute_level
from .streak_logic import compute_streaks

WEEKLY_WINDOW_DAYS = 7
MONTHLY_WINDOW_DAYS = 30


def completion_events_for(records: Iterable) -> List[CompletionEvent]:
    """
    One streak contribution per record that has been completed.

    A record contributes its last completion date, falling back to the day
    it was last updated when no completion date was recorded.
    """
    events = []
    for record in records:
        if record.last_completed_date is not None:
            events.append(CompletionEvent(record.last_completed_date, True))
        elif record.completed and record.updated_at is not None:
            events.append(CompletionEvent(record.updated_at.date(), True))
    return events


def build_player_stats(
    records: Iterable,
    now: datetime,
    span_xp: int = LEVEL_SPAN_XP,
    weekly_days: int = WEEKLY_WINDOW_DAYS,
    monthly_days: int = MONTHLY_WINDOW_DAYS,
) -> PlayerStats:
    """
    Sum XP and completions overall and for the weekly and monthly windows.

    A record falls into a window when its ``updated_at`` is no older than
    the window length measured back from ``now``.
    """
    records = list(records)
    week_start = now - timedelta(days=weekly_days)
    month_start = now - timedelta(days=monthly_days)

    total_xp = weekly_xp = monthly_xp = 0.0
    completed = weekly_completed = monthly_completed = 0

    for record in records:
        xp = record.xp_earned or 0.0
        total_xp += xp
        if record.completed:
            completed += 1

        updated = record.updated_at
        if updated is None:
            continue
        if updated >= week_start:
            weekly_xp += xp
            weekly_completed += int(bool(record.completed))
        if updated >= month_start:
            monthly_xp += xp
            monthly_completed += int(bool(record.completed))

    total_xp = round(total_xp, 1)
    return PlayerStats(
        total_xp=total_xp,
        weekly_xp=round(weekly_xp, 1),
        monthly_xp=round(monthly_xp, 1),
        completed_count=completed,
        weekly_completed=weekly_completed,
        monthly_completed=monthly_completed,
        level=compute_level(total_xp, span_xp=span_xp),
        streaks=compute_streaks(completion_events_for(records), today=now.date()),
    )
