"""
Tests for the Progress & XP award engine.

Tests cover:
- Partial credit and rounding
- First completion bonus and completion idempotence
- Zero targets
- Input validation
- Toggling goals and habits, and keeping habit streaks consistent
"""

import math
from datetime import date, timedelta

import pytest

from goalquest_app.modules.goals.constants import HabitType
from goalquest_app.modules.goals.logics.progress_engine import (
    InvalidProgressValue,
    apply_progress_update,
    partial_xp,
    progress_ratio,
    round_xp,
    toggle_completion,
)
from goalquest_app.modules.goals.schemas import GoalRecord

TODAY = date(2024, 3, 15)  # a Friday


def goal(**overrides):
    values = dict(id='g1', title='Read books', target_value=100, current_value=0, xp_value=10)
    values.update(overrides)
    return GoalRecord(**values)


def habit(habit_type=HabitType.DAILY, **overrides):
    values = dict(
        id='h1', title='Meditate', target_value=1, unit='completion',
        xp_value=5, habit_type=habit_type,
    )
    values.update(overrides)
    return GoalRecord(**values)


class TestHelpers:

    def test_progress_ratio_caps_at_one(self):
        assert progress_ratio(150, 100) == 1.0
        assert progress_ratio(25, 100) == 0.25

    def test_progress_ratio_zero_target(self):
        assert progress_ratio(0, 0) == 1.0
        assert progress_ratio(5, 0) == 1.0

    def test_round_xp_rounds_halves_up(self):
        assert round_xp(2.25) == 2.3
        assert round_xp(0.25) == 0.3
        assert round_xp(0.24) == 0.2

    def test_partial_xp_never_reaches_full_value(self):
        assert partial_xp(10, 999, 1000) == 9.9


class TestPartialProgress:

    def test_half_way_earns_half_xp(self):
        outcome = apply_progress_update(goal(), 50)
        assert outcome.record.current_value == 50
        assert outcome.record.completed is False
        assert outcome.record.xp_earned == 5.0
        assert outcome.xp_delta == 5.0

    def test_progress_notification(self):
        outcome = apply_progress_update(goal(), 50)
        assert outcome.notification.kind == 'progress'
        assert outcome.notification.xp == 5.0
        assert outcome.notification.message == 'Progress updated! +5.0 XP earned!'

    def test_partial_credit_is_rounded_half_up(self):
        outcome = apply_progress_update(goal(xp_value=1, target_value=4), 1)
        assert outcome.record.xp_earned == 0.3

    def test_partial_credit_rounded_to_one_decimal(self):
        outcome = apply_progress_update(goal(xp_value=10, target_value=3), 1)
        assert outcome.record.xp_earned == 3.3

    def test_unchanged_xp_has_no_notification(self):
        record = goal(current_value=50, xp_earned=5.0)
        outcome = apply_progress_update(record, 50)
        assert outcome.notification is None
        assert outcome.xp_delta == 0

    def test_lowering_progress_reduces_xp_silently(self):
        record = goal(current_value=80, xp_earned=8.0)
        outcome = apply_progress_update(record, 30)
        assert outcome.record.xp_earned == 3.0
        assert outcome.xp_delta == -5.0
        assert outcome.notification is None

    def test_input_record_is_not_modified(self):
        record = goal()
        apply_progress_update(record, 50)
        assert record.current_value == 0
        assert record.xp_earned == 0


class TestCompletion:

    def test_reaching_target_awards_full_xp(self):
        outcome = apply_progress_update(goal(current_value=50, xp_earned=5.0), 100)
        assert outcome.record.completed is True
        assert outcome.record.xp_earned == 10.0
        assert outcome.xp_delta == 5.0

    def test_completion_notification(self):
        outcome = apply_progress_update(goal(), 100)
        assert outcome.notification.kind == 'completed'
        assert outcome.notification.xp == 10
        assert outcome.notification.message == 'Goal completed! +10 XP earned!'

    def test_overshooting_target_keeps_value(self):
        outcome = apply_progress_update(goal(), 150)
        assert outcome.record.completed is True
        assert outcome.record.current_value == 150
        assert outcome.record.xp_earned == 10.0

    def test_completing_again_does_not_double_award(self):
        first = apply_progress_update(goal(), 100).record
        second = apply_progress_update(first, 120)
        assert second.record.xp_earned == 10.0
        assert second.xp_delta == 0
        assert second.notification is None

    def test_completion_is_idempotent(self):
        first = apply_progress_update(goal(), 100).record
        again = apply_progress_update(first, 100).record
        assert again == first

    def test_falling_below_target_reopens(self):
        completed = goal(current_value=100, completed=True, xp_earned=10.0)
        outcome = apply_progress_update(completed, 40)
        assert outcome.record.completed is False
        assert outcome.record.xp_earned == 4.0


class TestZeroTarget:

    def test_zero_target_completes_immediately(self):
        outcome = apply_progress_update(goal(target_value=0), 0)
        assert outcome.record.completed is True
        assert outcome.record.xp_earned == 10.0


class TestValidation:

    @pytest.mark.parametrize('value', [-1, -0.01])
    def test_negative_values_rejected(self, value):
        with pytest.raises(InvalidProgressValue):
            apply_progress_update(goal(), value)

    @pytest.mark.parametrize('value', [math.nan, math.inf, 'ten', None, True])
    def test_non_numbers_rejected(self, value):
        with pytest.raises(InvalidProgressValue):
            apply_progress_update(goal(), value)

    def test_invalid_value_is_a_value_error(self):
        with pytest.raises(ValueError):
            apply_progress_update(goal(), -5)


class TestToggleGoal:

    def test_completing_fills_progress(self):
        outcome = toggle_completion(goal(current_value=30, xp_earned=3.0), TODAY)
        assert outcome.record.completed is True
        assert outcome.record.current_value == 100
        assert outcome.record.xp_earned == 10.0
        assert outcome.xp_delta == 7.0
        assert outcome.notification.kind == 'completed'

    def test_goal_does_not_track_streaks(self):
        outcome = toggle_completion(goal(), TODAY)
        assert outcome.record.streak_count == 0
        assert outcome.record.last_completed_date is None

    def test_reopening_keeps_progress(self):
        completed = toggle_completion(goal(current_value=30), TODAY).record
        outcome = toggle_completion(completed, TODAY)
        assert outcome.record.completed is False
        assert outcome.record.xp_earned == 0.0
        assert outcome.record.current_value == 100
        assert outcome.xp_delta == -10.0
        assert outcome.notification.kind == 'reopened'
        assert outcome.notification.message == 'Goal reopened'


class TestToggleHabit:

    def test_completing_extends_streak(self):
        record = habit(streak_count=2, last_completed_date=TODAY - timedelta(days=1))
        outcome = toggle_completion(record, TODAY)
        assert outcome.record.completed is True
        assert outcome.record.streak_count == 3
        assert outcome.record.last_completed_date == TODAY
        assert outcome.record.xp_earned == 5.0

    def test_reopening_resets_streak(self):
        record = habit(completed=True, xp_earned=5.0, current_value=1, streak_count=4,
                       last_completed_date=TODAY)
        outcome = toggle_completion(record, TODAY)
        assert outcome.record.completed is False
        assert outcome.record.streak_count == 0
        assert outcome.record.last_completed_date is None
        assert outcome.record.xp_earned == 0.0

    def test_round_trip_differs_from_goal(self):
        record = habit(streak_count=2, last_completed_date=TODAY - timedelta(days=1))
        reopened = toggle_completion(toggle_completion(record, TODAY).record, TODAY).record
        assert reopened.streak_count == 0
        assert reopened.last_completed_date is None

    def test_repeated_toggling_same_day_does_not_inflate_streak(self):
        record = habit()
        for _ in range(5):
            record = toggle_completion(record, TODAY).record
        assert record.completed is True
        assert record.streak_count == 1

    def test_all_habit_types_award_full_xp(self):
        for habit_type in (HabitType.DAILY, HabitType.WEEKLY, HabitType.MONTHLY, HabitType.CUSTOM):
            outcome = toggle_completion(habit(habit_type), TODAY)
            assert outcome.record.xp_earned == 5.0
            assert outcome.record.streak_count == 1


class TestHabitProgressUpdate:

    def test_dropping_below_target_clears_streak(self):
        completed = toggle_completion(habit(streak_count=3, last_completed_date=TODAY - timedelta(days=1)), TODAY).record
        outcome = apply_progress_update(completed, 0)
        assert outcome.record.completed is False
        assert outcome.record.streak_count == 0
        assert outcome.record.last_completed_date is None

        again = toggle_completion(outcome.record, TODAY).record
        assert again.streak_count == 1

    def test_staying_complete_keeps_streak(self):
        completed = toggle_completion(habit(streak_count=3, last_completed_date=TODAY - timedelta(days=1)), TODAY).record
        outcome = apply_progress_update(completed, 1)
        assert outcome.record.streak_count == 4
        assert outcome.record.last_completed_date == TODAY

    def test_goal_streak_fields_untouched(self):
        completed = goal(current_value=100, completed=True, xp_earned=10.0)
        outcome = apply_progress_update(completed, 10)
        assert outcome.record.streak_count == 0
        assert outcome.record.last_completed_date is None
