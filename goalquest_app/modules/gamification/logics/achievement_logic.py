"""
Achievement Logic - Pure evaluation of the achievement catalog.

This module contains ONLY pure Python logic.
NO database, NO Flask, NO model dependencies allowed.
"""
from typing import Iterable, List, Mapping, Union

from ..constants import ACHIEVEMENT_CATALOG, AchievementDefinition
from ..schemas import AchievementStatus, PlayerStats


def evaluate_achievements(
    stats: Union[PlayerStats, Mapping[str, float]],
    catalog: Iterable[AchievementDefinition] = ACHIEVEMENT_CATALOG,
) -> List[AchievementStatus]:
    """
    Measure aggregate stats against every catalog entry, in catalog order.

    ``stats`` is a PlayerStats or a mapping with ``completed_count``,
    ``longest_streak``, ``total_xp`` and ``level``; missing metrics count
    as zero.
    """
    metrics = stats.as_metrics() if isinstance(stats, PlayerStats) else stats
    results = []
    for achievement in catalog:
        value = metrics.get(achievement.metric) or 0
        results.append(AchievementStatus(
            id=achievement.id,
            title=achievement.title,
            description=achievement.description,
            unlocked=value >= achievement.threshold,
            progress=min(value, achievement.threshold),
            max_progress=achievement.threshold,
        ))
    return results
