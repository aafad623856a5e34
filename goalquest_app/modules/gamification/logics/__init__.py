from .achievement_logic import evaluate_achievements
from .level_logic import compute_level
from .stats_logic import build_player_stats, completion_events_for
from .streak_logic import compute_streaks

__all__ = [
    'build_player_stats',
    'completion_events_for',
    'compute_level',
    'compute_streaks',
    'evaluate_achievements',
]
