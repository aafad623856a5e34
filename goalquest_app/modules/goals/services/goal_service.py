"""
Goal Service
Orchestrates the pure progress engine, the in-memory board and the store.

The pattern for every mutation is the same:
    1. Compute the new snapshot with a pure function from ..logics
    2. Write the changed fields through GoalStore
    3. Return a new board holding the stored record
    4. Announce the change over blinker signals

If step 2 fails nothing is returned, so the caller keeps its old board.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from flask import current_app

from goalquest_app.core.error_handlers import NotFoundError, PersistenceError, ValidationError
from goalquest_app.core.signals import goal_completed, goal_progress_logged, goal_reopened
from goalquest_app.utils.time_utils import utcnow
from ..constants import (
    DEFAULT_XP_VALUE,
    HABIT_TARGET_VALUE,
    HABIT_UNIT,
    XP_VALUE_MAX,
    XP_VALUE_MIN,
    HabitType,
    rule_for,
)
from ..logics.board import GoalBoard, RecordNotOnBoard
from ..logics.progress_engine import (
    InvalidProgressValue,
    apply_progress_update,
    partial_xp,
    toggle_completion,
)
from ..schemas import EDITABLE_FIELDS, CompletionDTO, GoalRecord, ProgressOutcome, changed_fields
from .goal_store import GoalStore

_SIGNALS = {
    'completed': goal_completed,
    'progress': goal_progress_logged,
    'reopened': goal_reopened,
}


class GoalService:
    """Record operations for one owner scope at a time."""

    def __init__(self, store: Optional[GoalStore] = None):
        self.store = store or GoalStore()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def load_board(self, owner_id: Optional[int]) -> GoalBoard:
        """Snapshot of all records in the owner's scope."""
        return GoalBoard.from_records(owner_id, self.store.list_records(owner_id))

    def completion_history(self, owner_id: Optional[int], goal_id: str) -> List[CompletionDTO]:
        # Scoped lookup first so foreign ids are reported as missing
        self.store.get_record(goal_id, owner_id)
        return self.store.list_completions(goal_id)

    # ------------------------------------------------------------------
    # Creating, editing, deleting
    # ------------------------------------------------------------------

    def create_goal(
        self,
        board: GoalBoard,
        *,
        title: str,
        target_value: float = HABIT_TARGET_VALUE,
        unit: str = '',
        description: Optional[str] = None,
        category: Optional[str] = None,
        deadline: Optional[date] = None,
        xp_value: int = DEFAULT_XP_VALUE,
        habit_type=HabitType.ONE_TIME,
        now: Optional[datetime] = None,
    ) -> Tuple[GoalBoard, GoalRecord]:
        """
        Create a goal or habit in the board's scope.

        Habits are tracked as single completions: their target is forced to
        one completion and they carry no deadline.
        """
        try:
            habit_type = HabitType(habit_type)
        except ValueError:
            raise ValidationError('Unknown habit type', errors={'habit_type': [str(habit_type)]})

        title = (title or '').strip()
        errors = self._check_fields(title=title, target_value=target_value, xp_value=xp_value)
        if errors:
            raise ValidationError('Invalid goal', errors=errors)

        if rule_for(habit_type).is_habit:
            target_value = HABIT_TARGET_VALUE
            unit = HABIT_UNIT
            deadline = None

        now = now or utcnow()
        record = GoalRecord(
            id=None,
            title=title,
            description=description or None,
            category=category or None,
            target_value=float(target_value),
            unit=unit or '',
            deadline=deadline,
            xp_value=int(xp_value),
            habit_type=habit_type,
            created_at=now,
            updated_at=now,
            user_id=board.owner_id,
        )
        goal_id = self.store.insert_record(record)
        stored = self.store.get_record(goal_id, board.owner_id)
        current_app.logger.info(f"Created {habit_type.value} record {goal_id} for owner {board.owner_id}")
        return board.add(stored), stored

    def edit_goal(
        self, board: GoalBoard, goal_id: str, changes: Dict[str, Any]
    ) -> Tuple[GoalBoard, GoalRecord]:
        """
        Change descriptive fields of a record.

        Changing the target re-derives the completed flag from the logged
        progress, and the earned XP follows the flag the same way a
        progress update does. A reopened record keeps its cleared XP.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                'Fields cannot be edited',
                errors={name: ['not editable'] for name in sorted(unknown)},
            )

        record = self._get(board, goal_id)
        if 'title' in changes:
            changes = dict(changes, title=(changes['title'] or '').strip())
        errors = self._check_fields(**{
            name: changes[name] for name in ('title', 'target_value', 'xp_value') if name in changes
        })
        if errors:
            raise ValidationError('Invalid goal', errors=errors)

        if record.is_habit:
            # Habit targets, units and deadlines are fixed
            changes = {
                name: value for name, value in changes.items()
                if name not in ('target_value', 'unit', 'deadline')
            }

        updated = record.evolve(**changes)
        if 'target_value' in changes:
            updated = updated.evolve(completed=updated.current_value >= updated.target_value)
        if updated.completed:
            updated = updated.evolve(xp_earned=float(updated.xp_value))
        elif record.completed or record.xp_earned > 0:
            updated = updated.evolve(xp_earned=partial_xp(
                updated.xp_value, updated.current_value, updated.target_value
            ))

        fields = changed_fields(record, updated, names=EDITABLE_FIELDS + ('completed', 'xp_earned'))
        if not fields:
            return board, record
        stored = self.store.update_record(goal_id, fields)
        return board.replace(stored), stored

    def delete_goal(self, board: GoalBoard, goal_id: str) -> GoalBoard:
        self._get(board, goal_id)
        self.store.delete_record(goal_id, board.owner_id)
        current_app.logger.info(f"Deleted record {goal_id} for owner {board.owner_id}")
        return board.remove(goal_id)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def update_progress(self, board: GoalBoard, goal_id: str, value) -> Tuple[GoalBoard, ProgressOutcome]:
        """
        Log a numeric progress value on a goal. Habits are completed by
        toggling only.

        Raises:
            ValidationError: the value is negative or not a number, or the
                record is a habit.
            NotFoundError: the record is not on the board.
            PersistenceError: the store rejected the write.
        """
        record = self._get(board, goal_id)
        if record.is_habit:
            raise ValidationError(
                'Habits are completed by toggling',
                errors={'current_value': ['Progress values apply to goals only']},
            )
        try:
            outcome = apply_progress_update(record, value)
        except InvalidProgressValue as e:
            raise ValidationError(str(e), errors={'current_value': [str(e)]})
        return self._persist(board, record, outcome)

    def toggle(self, board: GoalBoard, goal_id: str, today: Optional[date] = None) -> Tuple[GoalBoard, ProgressOutcome]:
        """Flip the completed flag of a record."""
        record = self._get(board, goal_id)
        today = today or utcnow().date()
        outcome = toggle_completion(record, today)
        log_day = today if record.is_habit and outcome.record.completed else None
        return self._persist(board, record, outcome, log_completion_on=log_day)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _get(board: GoalBoard, goal_id: str) -> GoalRecord:
        try:
            return board.get(goal_id)
        except RecordNotOnBoard:
            raise NotFoundError('Goal not found', resource=goal_id)

    @staticmethod
    def _check_fields(**values) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        if 'title' in values and not values['title']:
            errors['title'] = ['Title is required']
        if 'target_value' in values:
            target = values['target_value']
            if isinstance(target, bool) or not isinstance(target, (int, float)) or target <= 0:
                errors['target_value'] = ['Target must be a positive number']
        if 'xp_value' in values:
            xp = values['xp_value']
            if isinstance(xp, bool) or not isinstance(xp, int) or not XP_VALUE_MIN <= xp <= XP_VALUE_MAX:
                errors['xp_value'] = [f'XP value must be between {XP_VALUE_MIN} and {XP_VALUE_MAX}']
        return errors

    def _persist(
        self,
        board: GoalBoard,
        before: GoalRecord,
        outcome: ProgressOutcome,
        log_completion_on: Optional[date] = None,
    ) -> Tuple[GoalBoard, ProgressOutcome]:
        fields = changed_fields(before, outcome.record)
        if not fields and log_completion_on is None:
            return board, replace(outcome, notification=None)

        try:
            stored = self.store.update_record(before.id, fields, log_completion_on=log_completion_on)
        except PersistenceError:
            current_app.logger.warning(
                f"Progress on record {before.id} was not saved; keeping previous state"
            )
            raise

        outcome = replace(outcome, record=stored)
        self._announce(board.owner_id, stored, outcome)
        return board.replace(stored), outcome

    @staticmethod
    def _announce(owner_id: Optional[int], record: GoalRecord, outcome: ProgressOutcome) -> None:
        notification = outcome.notification
        if notification is None:
            return
        signal = _SIGNALS.get(notification.kind)
        if signal is None:
            return
        signal.send(
            None,
            owner_id=owner_id,
            goal_id=record.id,
            title=record.title,
            xp=notification.xp,
            message=notification.message,
        )
