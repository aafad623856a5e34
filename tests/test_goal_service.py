"""
Tests for the goal service: engine + board + store orchestration.

Tests cover:
- Creating goals and habits
- Editing and deleting
- Persisting progress and toggles
- Leaving the board untouched when validation or the store fails
- Signal emission
"""

from contextlib import contextmanager
from datetime import date, datetime, timezone

import pytest

from goalquest_app.core.error_handlers import NotFoundError, PersistenceError, ValidationError
from goalquest_app.core.signals import goal_completed, goal_progress_logged, goal_reopened
from goalquest_app.modules.goals.constants import HabitType
from goalquest_app.modules.goals.services.goal_service import GoalService
from goalquest_app.modules.goals.services.goal_store import GoalStore

NOW = datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


class FailingStore(GoalStore):
    """Store whose writes are always rejected."""

    def __init__(self):
        self.update_calls = 0

    def update_record(self, goal_id, fields, log_completion_on=None):
        self.update_calls += 1
        raise PersistenceError(operation='update')


@contextmanager
def captured(signal):
    received = []

    def receiver(sender, **kwargs):
        received.append(kwargs)

    with signal.connected_to(receiver):
        yield received


@pytest.fixture
def service(app):
    return GoalService()


@pytest.fixture
def board_with_goal(service):
    board = service.load_board(None)
    board, record = service.create_goal(board, title='Read 20 books', target_value=20, unit='books',
                                        xp_value=40, category='Learning', now=NOW)
    return board, record


@pytest.fixture
def board_with_habit(service):
    board = service.load_board(None)
    board, record = service.create_goal(board, title='Stretch', habit_type=HabitType.DAILY,
                                        xp_value=5, now=NOW)
    return board, record


class TestCreate:

    def test_create_goal(self, service, board_with_goal):
        board, record = board_with_goal
        assert record.id in board
        assert record.title == 'Read 20 books'
        assert record.target_value == 20
        assert record.current_value == 0
        assert record.completed is False
        assert record.xp_earned == 0
        assert record.streak_count == 0
        assert [r.id for r in service.load_board(None)] == [record.id]

    def test_habits_are_single_completions(self, service):
        board = service.load_board(None)
        _, record = service.create_goal(
            board, title='Walk', habit_type='weekly', target_value=30, unit='minutes',
            deadline=date(2024, 5, 1), now=NOW,
        )
        assert record.habit_type is HabitType.WEEKLY
        assert record.target_value == 1
        assert record.unit == 'completion'
        assert record.deadline is None

    def test_default_xp_value(self, service):
        _, record = service.create_goal(service.load_board(None), title='Plan', target_value=1, now=NOW)
        assert record.xp_value == 10

    @pytest.mark.parametrize('kwargs, field', [
        ({'title': '   ', 'target_value': 5}, 'title'),
        ({'title': 'Run', 'target_value': 0}, 'target_value'),
        ({'title': 'Run', 'target_value': 5, 'xp_value': 0}, 'xp_value'),
        ({'title': 'Run', 'target_value': 5, 'xp_value': 101}, 'xp_value'),
        ({'title': 'Run', 'target_value': 5, 'habit_type': 'yearly'}, 'habit_type'),
    ])
    def test_invalid_input(self, service, kwargs, field):
        with pytest.raises(ValidationError) as excinfo:
            service.create_goal(service.load_board(None), now=NOW, **kwargs)
        assert field in excinfo.value.details['errors']
        assert service.load_board(None).records == ()

    def test_owner_is_taken_from_board(self, service, user):
        board = service.load_board(user.user_id)
        _, record = service.create_goal(board, title='Mine', target_value=3, now=NOW)
        assert record.user_id == user.user_id
        assert len(service.load_board(None)) == 0


class TestProgress:

    def test_progress_is_persisted(self, service, board_with_goal):
        board, record = board_with_goal
        new_board, outcome = service.update_progress(board, record.id, 10)

        assert outcome.record.current_value == 10
        assert outcome.record.xp_earned == 20.0
        assert outcome.notification.kind == 'progress'
        assert new_board.get(record.id) == outcome.record
        assert service.load_board(None).get(record.id).xp_earned == 20.0

    def test_previous_board_is_unchanged(self, service, board_with_goal):
        board, record = board_with_goal
        service.update_progress(board, record.id, 10)
        assert board.get(record.id).current_value == 0

    def test_completion_signal(self, service, board_with_goal):
        board, record = board_with_goal
        with captured(goal_completed) as received:
            service.update_progress(board, record.id, 20)
        assert received == [{
            'owner_id': None,
            'goal_id': record.id,
            'title': 'Read 20 books',
            'xp': 40.0,
            'message': 'Goal completed! +40 XP earned!',
        }]

    def test_progress_signal(self, service, board_with_goal):
        board, record = board_with_goal
        with captured(goal_progress_logged) as received:
            service.update_progress(board, record.id, 5)
        assert received[0]['xp'] == 10.0

    def test_negative_value_never_reaches_store(self, app, board_with_goal):
        board, record = board_with_goal
        store = FailingStore()
        with pytest.raises(ValidationError) as excinfo:
            GoalService(store).update_progress(board, record.id, -3)
        assert excinfo.value.status_code == 400
        assert store.update_calls == 0

    def test_habits_refuse_progress_values(self, app, board_with_habit):
        board, record = board_with_habit
        service = GoalService()
        board, _ = service.toggle(board, record.id, today=TODAY)
        store = FailingStore()
        with pytest.raises(ValidationError) as excinfo:
            GoalService(store).update_progress(board, record.id, 0)
        assert 'current_value' in excinfo.value.details['errors']
        assert store.update_calls == 0

        stored = service.load_board(None).get(record.id)
        assert stored.completed is True
        assert stored.streak_count == 1

    def test_unknown_record(self, service, board_with_goal):
        board, _ = board_with_goal
        with pytest.raises(NotFoundError):
            service.update_progress(board, 'missing', 5)

    def test_store_failure_leaves_state_untouched(self, app, service, board_with_goal):
        board, record = board_with_goal
        store = FailingStore()
        with captured(goal_completed) as received:
            with pytest.raises(PersistenceError):
                GoalService(store).update_progress(board, record.id, 20)
        assert store.update_calls == 1
        assert received == []
        assert board.get(record.id) == record
        assert service.load_board(None).get(record.id).completed is False

    def test_unchanged_value_skips_write(self, app, board_with_goal):
        board, record = board_with_goal
        new_board, outcome = GoalService(FailingStore()).update_progress(board, record.id, 0)
        assert new_board is board
        assert outcome.notification is None


class TestToggle:

    def test_toggle_goal_round_trip(self, service, board_with_goal):
        board, record = board_with_goal
        board, done = service.toggle(board, record.id, today=TODAY)
        assert done.record.completed is True
        assert done.record.current_value == 20
        assert done.xp_delta == 40.0

        with captured(goal_reopened) as received:
            board, reopened = service.toggle(board, record.id, today=TODAY)
        assert reopened.record.completed is False
        assert reopened.record.xp_earned == 0
        assert reopened.record.current_value == 20
        assert received[0]['message'] == 'Goal reopened'

    def test_goal_completion_is_not_logged(self, service, board_with_goal):
        board, record = board_with_goal
        service.toggle(board, record.id, today=TODAY)
        assert service.completion_history(None, record.id) == []

    def test_habit_completion_logged_and_streak_extended(self, service, board_with_habit):
        board, record = board_with_habit
        board, outcome = service.toggle(board, record.id, today=TODAY)
        assert outcome.record.streak_count == 1
        assert outcome.record.last_completed_date == TODAY

        history = service.completion_history(None, record.id)
        assert [c.completed_date for c in history] == [TODAY]

    def test_repeated_toggles_keep_single_log_entry(self, service, board_with_habit):
        board, record = board_with_habit
        for _ in range(3):
            board, outcome = service.toggle(board, record.id, today=TODAY)
        assert outcome.record.completed is True
        assert outcome.record.streak_count == 1
        assert len(service.completion_history(None, record.id)) == 1

    def test_store_failure_during_toggle(self, app, board_with_habit):
        board, record = board_with_habit
        with pytest.raises(PersistenceError):
            GoalService(FailingStore()).toggle(board, record.id, today=TODAY)
        assert board.get(record.id).completed is False

    def test_history_is_owner_scoped(self, service, user, board_with_habit):
        _, record = board_with_habit
        with pytest.raises(NotFoundError):
            service.completion_history(user.user_id, record.id)


class TestEditAndDelete:

    def test_edit_descriptive_fields(self, service, board_with_goal):
        board, record = board_with_goal
        board, updated = service.edit_goal(board, record.id, {'title': ' Read 25 books ', 'category': 'Fun'})
        assert updated.title == 'Read 25 books'
        assert updated.category == 'Fun'
        assert board.get(record.id).title == 'Read 25 books'

    def test_changing_target_rederives_partial_xp(self, service, board_with_goal):
        board, record = board_with_goal
        board, _ = service.update_progress(board, record.id, 10)
        board, updated = service.edit_goal(board, record.id, {'target_value': 40.0})
        assert updated.xp_earned == 10.0

    def test_changing_xp_value_of_completed_goal(self, service, board_with_goal):
        board, record = board_with_goal
        board, _ = service.toggle(board, record.id, today=TODAY)
        board, updated = service.edit_goal(board, record.id, {'xp_value': 50})
        assert updated.xp_earned == 50.0

    def test_lowering_target_below_progress_completes(self, service, board_with_goal):
        board, record = board_with_goal
        board, _ = service.update_progress(board, record.id, 16)
        board, updated = service.edit_goal(board, record.id, {'target_value': 10.0})
        assert updated.completed is True
        assert updated.xp_earned == 40.0
        assert service.load_board(None).get(record.id).completed is True

    def test_raising_target_above_progress_reopens(self, service, board_with_goal):
        board, record = board_with_goal
        board, _ = service.update_progress(board, record.id, 20)
        board, updated = service.edit_goal(board, record.id, {'target_value': 40.0})
        assert updated.completed is False
        assert updated.current_value == 20
        assert updated.xp_earned == 20.0
        assert service.load_board(None).get(record.id).completed is False

    def test_reopened_goal_keeps_cleared_xp(self, service, board_with_goal):
        board, record = board_with_goal
        board, _ = service.toggle(board, record.id, today=TODAY)
        board, _ = service.toggle(board, record.id, today=TODAY)
        board, updated = service.edit_goal(board, record.id, {'xp_value': 50})
        assert updated.completed is False
        assert updated.xp_earned == 0.0

    def test_habit_target_is_fixed(self, service, board_with_habit):
        board, record = board_with_habit
        board, updated = service.edit_goal(board, record.id, {'target_value': 10.0, 'title': 'Stretch well'})
        assert updated.target_value == 1
        assert updated.title == 'Stretch well'

    def test_progress_fields_are_not_editable(self, service, board_with_goal):
        board, record = board_with_goal
        with pytest.raises(ValidationError):
            service.edit_goal(board, record.id, {'xp_earned': 40.0})
        with pytest.raises(ValidationError):
            service.edit_goal(board, record.id, {'habit_type': 'daily'})

    def test_invalid_edit(self, service, board_with_goal):
        board, record = board_with_goal
        with pytest.raises(ValidationError):
            service.edit_goal(board, record.id, {'xp_value': 500})

    def test_delete(self, service, board_with_goal):
        board, record = board_with_goal
        board = service.delete_goal(board, record.id)
        assert record.id not in board
        assert len(service.load_board(None)) == 0
