"""Achievement catalog and leveling constants."""

from __future__ import annotations

from dataclasses import dataclass

# Level n spans LEVEL_SPAN_XP * n experience points
LEVEL_SPAN_XP = 100

METRIC_COMPLETED = 'completed_count'
METRIC_LONGEST_STREAK = 'longest_streak'
METRIC_TOTAL_XP = 'total_xp'
METRIC_LEVEL = 'level'


@dataclass(frozen=True)
class AchievementDefinition:
    """A milestone unlocked once ``metric`` reaches ``threshold``."""

    id: str
    title: str
    description: str
    metric: str
    threshold: int


# Order is part of the contract: clients render achievements in this order.
ACHIEVEMENT_CATALOG: tuple[AchievementDefinition, ...] = (
    AchievementDefinition('first_goal', 'First Step', 'Complete your first goal', METRIC_COMPLETED, 1),
    AchievementDefinition('goal_getter', 'Goal Getter', 'Complete 10 goals', METRIC_COMPLETED, 10),
    AchievementDefinition('goal_crusher', 'Goal Crusher', 'Complete 50 goals', METRIC_COMPLETED, 50),
    AchievementDefinition('streak_3', 'Warming Up', 'Reach a 3 day streak', METRIC_LONGEST_STREAK, 3),
    AchievementDefinition('streak_7', 'On Fire', 'Reach a 7 day streak', METRIC_LONGEST_STREAK, 7),
    AchievementDefinition('streak_30', 'Unstoppable', 'Reach a 30 day streak', METRIC_LONGEST_STREAK, 30),
    AchievementDefinition('xp_500', 'XP Hunter', 'Earn 500 XP', METRIC_TOTAL_XP, 500),
    AchievementDefinition('xp_2500', 'XP Master', 'Earn 2500 XP', METRIC_TOTAL_XP, 2500),
    AchievementDefinition('level_5', 'Rising Star', 'Reach level 5', METRIC_LEVEL, 5),
)
