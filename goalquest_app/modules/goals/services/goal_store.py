"""
Goal Store
Low-level CRUD operations on the 'goals' and 'habit_completions' tables.

Every method works with GoalRecord snapshots; SQLAlchemy models never leave
this module.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from goalquest_app.core.error_handlers import NotFoundError, PersistenceError
from goalquest_app.db_instance import db
from goalquest_app.utils.time_utils import ensure_utc, utcnow
from ..constants import HabitType
from ..models import Goal, HabitCompletion
from ..schemas import EDITABLE_FIELDS, PROGRESS_FIELDS, CompletionDTO, GoalRecord

_WRITABLE_FIELDS = frozenset(EDITABLE_FIELDS) | frozenset(PROGRESS_FIELDS)


class GoalStore:
    """Record store backed by the application database."""

    @staticmethod
    def to_record(model: Goal) -> GoalRecord:
        """Convert a Goal row into an immutable snapshot."""
        return GoalRecord(
            id=model.goal_id,
            title=model.title,
            description=model.description,
            category=model.category,
            target_value=model.target_value,
            current_value=model.current_value or 0.0,
            unit=model.unit or '',
            deadline=model.deadline,
            completed=bool(model.completed),
            xp_value=model.xp_value,
            xp_earned=model.xp_earned or 0.0,
            habit_type=HabitType(model.habit_type),
            streak_count=model.streak_count or 0,
            last_completed_date=model.last_completed_date,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            user_id=model.user_id,
        )

    def _commit(self, operation: str) -> None:
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Goal store {operation} failed: {e}", exc_info=True)
            raise PersistenceError(operation=operation) from e

    def _scoped_query(self, owner_id: Optional[int]):
        if owner_id is None:
            return Goal.query.filter(Goal.user_id.is_(None))
        return Goal.query.filter(Goal.user_id == owner_id)

    def _get_model(self, goal_id: str, owner_id: Optional[int]) -> Goal:
        model = self._scoped_query(owner_id).filter(Goal.goal_id == goal_id).first()
        if model is None:
            raise NotFoundError('Goal not found', resource=goal_id)
        return model

    def list_records(self, owner_id: Optional[int]) -> List[GoalRecord]:
        """All records of one owner (guest records when owner_id is None), newest first."""
        models = self._scoped_query(owner_id).order_by(Goal.created_at.desc()).all()
        return [self.to_record(model) for model in models]

    def get_record(self, goal_id: str, owner_id: Optional[int]) -> GoalRecord:
        return self.to_record(self._get_model(goal_id, owner_id))

    def insert_record(self, record: GoalRecord) -> str:
        """Persist a new record and return its id."""
        now = utcnow()
        model = Goal(
            user_id=record.user_id,
            title=record.title,
            description=record.description,
            category=record.category,
            unit=record.unit,
            deadline=record.deadline,
            target_value=record.target_value,
            current_value=record.current_value,
            completed=record.completed,
            xp_value=record.xp_value,
            xp_earned=record.xp_earned,
            habit_type=HabitType(record.habit_type).value,
            streak_count=record.streak_count,
            last_completed_date=record.last_completed_date,
            created_at=record.created_at or now,
            updated_at=record.updated_at or now,
        )
        if record.id:
            model.goal_id = record.id
        db.session.add(model)
        self._commit('insert')
        return model.goal_id

    def update_record(
        self,
        goal_id: str,
        fields: Dict[str, Any],
        log_completion_on: Optional[date] = None,
    ) -> GoalRecord:
        """
        Apply a partial update and return the stored record.

        When ``log_completion_on`` is given, a completion row for that day is
        written in the same transaction (unless the day is already logged).

        Raises:
            NotFoundError: no record with this id.
            PersistenceError: the database rejected the write.
        """
        unknown = set(fields) - _WRITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not writable: {', '.join(sorted(unknown))}")

        model = db.session.get(Goal, goal_id)
        if model is None:
            raise NotFoundError('Goal not found', resource=goal_id)

        for name, value in fields.items():
            setattr(model, name, value)
        model.updated_at = utcnow()

        if log_completion_on is not None:
            logged = (
                HabitCompletion.query
                .filter_by(goal_id=goal_id, completed_date=log_completion_on)
                .first()
            )
            if logged is None:
                db.session.add(HabitCompletion(goal_id=goal_id, completed_date=log_completion_on))

        self._commit('update')
        return self.to_record(model)

    def delete_record(self, goal_id: str, owner_id: Optional[int]) -> None:
        model = self._get_model(goal_id, owner_id)
        db.session.delete(model)
        self._commit('delete')

    def list_completions(self, goal_id: str) -> List[CompletionDTO]:
        rows = (
            HabitCompletion.query.filter_by(goal_id=goal_id)
            .order_by(HabitCompletion.completed_date.desc())
            .all()
        )
        return [
            CompletionDTO(
                id=row.completion_id,
                goal_id=row.goal_id,
                completed_date=row.completed_date,
                completed_at=ensure_utc(row.completed_at),
                auto_completed=bool(row.auto_completed),
            )
            for row in rows
        ]
