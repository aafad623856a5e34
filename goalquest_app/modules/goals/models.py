"""Goal and habit models."""

from __future__ import annotations

import uuid

from goalquest_app.db_instance import db
from goalquest_app.utils.time_utils import utcnow
from .constants import DEFAULT_XP_VALUE, HabitType


def _new_goal_id() -> str:
    return uuid.uuid4().hex


class Goal(db.Model):
    """
    A quantifiable target. One-time records are goals, every other
    habit_type makes the record a recurring habit.
    """
    __tablename__ = 'goals'

    goal_id = db.Column(db.String(32), primary_key=True, default=_new_goal_id)
    # NULL owner = guest record
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=True, index=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(100))
    unit = db.Column(db.String(50), nullable=False, default='')
    deadline = db.Column(db.Date, nullable=True)

    # Progress
    target_value = db.Column(db.Float, nullable=False)
    current_value = db.Column(db.Float, nullable=False, default=0.0)
    completed = db.Column(db.Boolean, nullable=False, default=False)

    # Experience points
    xp_value = db.Column(db.Integer, nullable=False, default=DEFAULT_XP_VALUE)
    xp_earned = db.Column(db.Float, nullable=False, default=0.0)

    # Habit bookkeeping
    habit_type = db.Column(db.String(20), nullable=False, default=HabitType.ONE_TIME.value)
    streak_count = db.Column(db.Integer, nullable=False, default=0)
    last_completed_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    completions = db.relationship(
        'HabitCompletion', backref='goal', lazy='dynamic', cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<Goal {self.goal_id} {self.title!r}>'


class HabitCompletion(db.Model):
    """
    One credited completion of a record on a calendar day.
    """
    __tablename__ = 'habit_completions'

    completion_id = db.Column(db.Integer, primary_key=True)
    goal_id = db.Column(db.String(32), db.ForeignKey('goals.goal_id'), nullable=False)
    completed_date = db.Column(db.Date, nullable=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    auto_completed = db.Column(db.Boolean, nullable=False, default=False)

    __table_args__ = (
        db.UniqueConstraint('goal_id', 'completed_date', name='_goal_completion_day_uc'),
        db.Index('ix_habit_completions_date', 'completed_date'),
    )

    def __repr__(self):
        return f'<HabitCompletion {self.goal_id} - {self.completed_date}>'
