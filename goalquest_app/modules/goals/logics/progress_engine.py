"""
Progress & XP Award Logic - Pure functions for record mutations.

This module contains ONLY pure Python logic.
NO database, NO Flask, NO model dependencies allowed.

Both entry points take a record snapshot and return a ProgressOutcome with a
new snapshot; the input record is never modified.
"""
import math
from datetime import date
from numbers import Real

from ..schemas import GoalRecord, Notification, ProgressOutcome


class InvalidProgressValue(ValueError):
    """Raised when a logged progress value cannot be accepted."""


def progress_ratio(current_value: float, target_value: float) -> float:
    """
    Fraction of the target reached, capped at 1.0.

    A target of zero (or less) is trivially satisfied and counts as 100%.
    """
    if target_value <= 0:
        return 1.0
    return min(current_value / target_value, 1.0)


def round_xp(value: float) -> float:
    """Round to one decimal place, halves rounding up."""
    return math.floor(value * 10 + 0.5) / 10


def partial_xp(xp_value: int, current_value: float, target_value: float) -> float:
    """
    Proportional credit for an incomplete record.

    Rounding may never lift partial credit up to the full value; that is
    reserved for completion.
    """
    earned = round_xp(xp_value * progress_ratio(current_value, target_value))
    if earned >= xp_value:
        earned = round_xp(xp_value - 0.1)
    return max(earned, 0.0)


def _validated_value(value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidProgressValue('Please enter a valid number')
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise InvalidProgressValue('Please enter a valid number')
    if value < 0:
        raise InvalidProgressValue('Progress cannot be negative')
    return value


def apply_progress_update(record: GoalRecord, new_current_value) -> ProgressOutcome:
    """
    Log a numeric progress value on a record.

    Full XP is only granted on the first transition to completed; a record
    that stays completed keeps the XP it already has. Incomplete records
    earn proportional credit rounded to one decimal place. A habit that
    drops out of completion loses its streak, as with a toggle.

    Raises:
        InvalidProgressValue: value is negative or not a finite number.
    """
    value = _validated_value(new_current_value)
    is_now_complete = value >= record.target_value

    if is_now_complete and not record.completed:
        xp_earned = float(record.xp_value)
    elif is_now_complete:
        xp_earned = record.xp_earned
    else:
        xp_earned = partial_xp(record.xp_value, value, record.target_value)

    changes = {
        'current_value': value,
        'completed': is_now_complete,
        'xp_earned': xp_earned,
    }
    if record.is_habit and record.completed and not is_now_complete:
        changes.update(streak_count=0, last_completed_date=None)
    updated = record.evolve(**changes)

    notification = None
    if is_now_complete and not record.completed:
        notification = Notification(
            kind='completed',
            xp=float(record.xp_value),
            message=f'Goal completed! +{record.xp_value} XP earned!',
        )
    elif not is_now_complete and xp_earned > record.xp_earned:
        gained = round_xp(xp_earned - record.xp_earned)
        if gained > 0:
            notification = Notification(
                kind='progress',
                xp=gained,
                message=f'Progress updated! +{gained} XP earned!',
            )

    return ProgressOutcome(
        record=updated,
        xp_delta=round_xp(xp_earned - record.xp_earned),
        notification=notification,
    )


def toggle_completion(record: GoalRecord, today: date) -> ProgressOutcome:
    """
    Flip the completed flag of a record.

    Completing grants the full XP and fills the progress up to the target.
    Reopening clears the XP but leaves the logged progress alone; habits
    also lose their streak and last completion date, so toggling a habit
    repeatedly on one day never counts that day more than once.
    """
    if not record.completed:
        changes = {
            'completed': True,
            'xp_earned': float(record.xp_value),
            'current_value': record.target_value,
        }
        if record.is_habit:
            changes.update(streak_count=record.streak_count + 1, last_completed_date=today)
        notification = Notification(
            kind='completed',
            xp=float(record.xp_value),
            message=f'Goal completed! +{record.xp_value} XP earned!',
        )
    else:
        changes = {'completed': False, 'xp_earned': 0.0}
        if record.is_habit:
            changes.update(streak_count=0, last_completed_date=None)
        notification = Notification(kind='reopened', xp=0.0, message='Goal reopened')

    updated = record.evolve(**changes)
    return ProgressOutcome(
        record=updated,
        xp_delta=round_xp(updated.xp_earned - record.xp_earned),
        notification=notification,
    )
