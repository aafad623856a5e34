"""
Streak Logic - Pure functions for streak calculation.

This module contains ONLY pure Python logic.
NO database, NO Flask, NO model dependencies allowed.
"""
from datetime import date, datetime
from typing import Iterable, List, Union

from ..schemas import CompletionEvent, StreakInfo


def compute_streaks(completions: Iterable, today: Union[date, datetime]) -> StreakInfo:
    """
    Compute the current and longest run of consecutive completion days.

    Args:
        completions: CompletionEvent entries or plain ``(date, completed)``
            tuples. Dates may be date objects, datetime objects or ISO
            strings; entries that are not completed or cannot be parsed are
            skipped.
        today: Reference day for deciding whether the last run is still alive.

    Returns:
        StreakInfo. The current streak is 0 unless the latest completion
        was today or yesterday.

    Examples:
        >>> from datetime import date
        >>> events = [(date(2024, 1, 1), True), (date(2024, 1, 2), True), (date(2024, 1, 3), True)]
        >>> compute_streaks(events, today=date(2024, 1, 3))
        StreakInfo(current_streak=3, longest_streak=3)

        >>> # Gap in dates
        >>> events = [(date(2024, 1, 1), True), (date(2024, 1, 3), True)]
        >>> compute_streaks(events, today=date(2024, 1, 3))
        StreakInfo(current_streak=1, longest_streak=1)
    """
    days = sorted(_completed_days(completions))
    if not days:
        return StreakInfo(current_streak=0, longest_streak=0)

    running = 0
    longest = 0
    previous = None
    for day in days:
        if previous is None:
            running = 1
        else:
            gap = (day - previous).days
            if gap == 1:
                running += 1
            elif gap > 1:
                running = 1
            # gap == 0: several completions on one day count once
        longest = max(longest, running)
        previous = day

    today = _normalize_to_date(today)
    lapse = (today - previous).days
    current = running if 0 <= lapse <= 1 else 0
    return StreakInfo(current_streak=current, longest_streak=longest)


def _completed_days(completions: Iterable) -> List[date]:
    days = []
    for entry in completions or ():
        event = CompletionEvent(*entry) if isinstance(entry, tuple) else CompletionEvent(entry)
        if not event.completed:
            continue
        normalized = _normalize_to_date(event.date)
        if normalized:
            days.append(normalized)
    return days


def _normalize_to_date(val: Union[date, datetime, str, None]) -> Union[date, None]:
    """
    Normalize various date representations to a date object.

    Args:
        val: Can be date, datetime, ISO string, or None.

    Returns:
        date object or None if conversion fails.
    """
    if val is None:
        return None

    if isinstance(val, datetime):
        return val.date()

    if isinstance(val, date):
        return val

    if isinstance(val, str):
        try:
            # ISO format first (YYYY-MM-DD or full datetime)
            return datetime.fromisoformat(val).date()
        except ValueError:
            try:
                return datetime.strptime(val, '%Y-%m-%d').date()
            except ValueError:
                return None

    return None
