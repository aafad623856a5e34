from datetime import datetime
from typing import Any, Dict, List, Optional

from .logics.achievement_logic import evaluate_achievements
from .schemas import AchievementStatus, PlayerStats
from .services.stats_service import StatsService


def get_player_stats(owner_id: Optional[int], now: Optional[datetime] = None) -> PlayerStats:
    """Aggregate XP, level and streaks for an owner."""
    return StatsService.get_player_stats(owner_id, now)


def get_achievements(owner_id: Optional[int], now: Optional[datetime] = None) -> List[AchievementStatus]:
    return evaluate_achievements(StatsService.get_player_stats(owner_id, now))


def get_dashboard(owner_id: Optional[int], now: Optional[datetime] = None) -> Dict[str, Any]:
    return StatsService.get_dashboard(owner_id, now)
