# File: goalquest_app/modules/gamification/services/stats_service.py
"""
Stats Service
=============
Builds the gamification dashboard (level, streaks, XP windows and
achievements) for one owner scope.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from flask import current_app

from goalquest_app.modules.goals.interface import get_owner_records
from goalquest_app.utils.time_utils import utcnow
from ..constants import LEVEL_SPAN_XP
from ..logics.achievement_logic import evaluate_achievements
from ..logics.stats_logic import MONTHLY_WINDOW_DAYS, WEEKLY_WINDOW_DAYS, build_player_stats
from ..schemas import PlayerStats


class StatsService:
    """Read-only aggregation over the goals module's records."""

    @staticmethod
    def get_player_stats(owner_id: Optional[int], now: Optional[datetime] = None) -> PlayerStats:
        config = current_app.config
        return build_player_stats(
            get_owner_records(owner_id),
            now=now or utcnow(),
            span_xp=config.get('LEVEL_SPAN_XP', LEVEL_SPAN_XP),
            weekly_days=config.get('WEEKLY_WINDOW_DAYS', WEEKLY_WINDOW_DAYS),
            monthly_days=config.get('MONTHLY_WINDOW_DAYS', MONTHLY_WINDOW_DAYS),
        )

    @staticmethod
    def get_dashboard(owner_id: Optional[int], now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Get the full dashboard payload for UI display.

        Returns:
            dict with 'stats', 'level', 'streaks' and 'achievements'
        """
        stats = StatsService.get_player_stats(owner_id, now)
        achievements = evaluate_achievements(stats)
        unlocked = sum(1 for achievement in achievements if achievement.unlocked)
        current_app.logger.debug(
            f"[Gamification] Dashboard for owner={owner_id}: level={stats.level.level}, "
            f"xp={stats.total_xp}, unlocked={unlocked}/{len(achievements)}"
        )
        return {
            'stats': stats.to_dict(),
            'level': stats.level.to_dict(),
            'streaks': stats.streaks.to_dict(),
            'achievements': [achievement.to_dict() for achievement in achievements],
        }
