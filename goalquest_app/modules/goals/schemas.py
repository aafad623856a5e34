from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Optional

from goalquest_app.utils.time_utils import isoformat_or_none
from .constants import DEFAULT_XP_VALUE, HabitType, rule_for

# Fields the progress engine is allowed to change
PROGRESS_FIELDS = (
    'current_value',
    'completed',
    'xp_earned',
    'streak_count',
    'last_completed_date',
)

# Fields a user may edit directly
EDITABLE_FIELDS = (
    'title',
    'description',
    'category',
    'target_value',
    'unit',
    'deadline',
    'xp_value',
)


@dataclass(frozen=True)
class GoalRecord:
    """Immutable snapshot of one goal or habit."""

    id: Optional[str]
    title: str
    target_value: float
    current_value: float = 0.0
    unit: str = ''
    description: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[date] = None
    completed: bool = False
    xp_value: int = DEFAULT_XP_VALUE
    xp_earned: float = 0.0
    habit_type: HabitType = HabitType.ONE_TIME
    streak_count: int = 0
    last_completed_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user_id: Optional[int] = None

    @property
    def is_habit(self) -> bool:
        return rule_for(self.habit_type).is_habit

    @property
    def progress_percent(self) -> float:
        if self.target_value <= 0:
            return 100.0
        return min(self.current_value / self.target_value * 100, 100.0)

    def evolve(self, **changes) -> 'GoalRecord':
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'target_value': self.target_value,
            'current_value': self.current_value,
            'unit': self.unit,
            'deadline': isoformat_or_none(self.deadline),
            'completed': self.completed,
            'xp_value': self.xp_value,
            'xp_earned': self.xp_earned,
            'habit_type': HabitType(self.habit_type).value,
            'is_habit': self.is_habit,
            'streak_count': self.streak_count,
            'last_completed_date': isoformat_or_none(self.last_completed_date),
            'progress_percent': round(self.progress_percent, 1),
            'created_at': isoformat_or_none(self.created_at),
            'updated_at': isoformat_or_none(self.updated_at),
            'user_id': self.user_id,
        }


def changed_fields(before: GoalRecord, after: GoalRecord, names=PROGRESS_FIELDS) -> Dict[str, Any]:
    """Return ``{field: new_value}`` for every field in ``names`` that differs."""
    return {
        name: getattr(after, name)
        for name in names
        if getattr(before, name) != getattr(after, name)
    }


@dataclass(frozen=True)
class Notification:
    """User-facing announcement produced by a record change."""

    kind: str  # 'completed', 'progress' or 'reopened'
    xp: float
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'xp': self.xp, 'message': self.message}


@dataclass(frozen=True)
class ProgressOutcome:
    """New record state plus the XP change to display."""

    record: GoalRecord
    xp_delta: float
    notification: Optional[Notification] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'goal': self.record.to_dict(),
            'xp_delta': self.xp_delta,
            'notification': self.notification.to_dict() if self.notification else None,
        }


@dataclass
class CompletionDTO:
    id: int
    goal_id: str
    completed_date: date
    completed_at: Optional[datetime] = None
    auto_completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'goal_id': self.goal_id,
            'completed_date': isoformat_or_none(self.completed_date),
            'completed_at': isoformat_or_none(self.completed_at),
            'auto_completed': self.auto_completed,
        }
