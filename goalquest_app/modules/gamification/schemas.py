from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, NamedTuple, Union


@dataclass(frozen=True)
class LevelInfo:
    level: int
    xp_into_level: float
    xp_needed_for_level: int
    xp_to_next_level: float

    @property
    def progress_percent(self) -> float:
        """Share of the current level already earned, 0-100."""
        if self.xp_needed_for_level <= 0:
            return 0.0
        return self.xp_into_level / self.xp_needed_for_level * 100

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['progress_percent'] = round(self.progress_percent, 1)
        return data


@dataclass(frozen=True)
class StreakInfo:
    current_streak: int = 0
    longest_streak: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CompletionEvent(NamedTuple):
    """One contribution to the streak sequence."""

    date: Union[date, datetime, str, None]
    completed: bool = True


@dataclass(frozen=True)
class AchievementStatus:
    id: str
    title: str
    description: str
    unlocked: bool
    progress: float
    max_progress: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PlayerStats:
    """Aggregate figures for one owner's records."""

    total_xp: float
    weekly_xp: float
    monthly_xp: float
    completed_count: int
    weekly_completed: int
    monthly_completed: int
    level: LevelInfo
    streaks: StreakInfo

    def as_metrics(self) -> Dict[str, float]:
        """Values the achievement catalog is measured against."""
        return {
            'completed_count': self.completed_count,
            'longest_streak': self.streaks.longest_streak,
            'total_xp': self.total_xp,
            'level': self.level.level,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_xp': self.total_xp,
            'weekly_xp': self.weekly_xp,
            'monthly_xp': self.monthly_xp,
            'completed_count': self.completed_count,
            'weekly_completed': self.weekly_completed,
            'monthly_completed': self.monthly_completed,
        }
