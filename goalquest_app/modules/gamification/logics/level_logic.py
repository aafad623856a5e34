"""
Level Logic - Pure functions for turning total XP into a level.

This module contains ONLY pure Python logic.
NO database, NO Flask, NO model dependencies allowed.
"""
import math
from numbers import Real

from ..constants import LEVEL_SPAN_XP
from ..schemas import LevelInfo


def compute_level(total_xp, span_xp: int = LEVEL_SPAN_XP) -> LevelInfo:
    """
    Place a total XP amount on the level ladder.

    Level n spans ``span_xp * n`` XP, so reaching level 2 takes 100 XP,
    level 3 takes 300 XP in total, level 4 takes 600, and so on.

    Args:
        total_xp: Non-negative XP total. Fractional values are allowed.
        span_xp: Size of the first level's span.

    Returns:
        LevelInfo with the level, the XP earned inside it, the size of
        the level and the XP still missing to the next one.

    Examples:
        >>> compute_level(0)
        LevelInfo(level=1, xp_into_level=0, xp_needed_for_level=100, xp_to_next_level=100)
        >>> compute_level(300).level
        3
    """
    if isinstance(total_xp, bool) or not isinstance(total_xp, Real):
        raise ValueError(f'total_xp must be a number, got {total_xp!r}')
    if math.isnan(total_xp) or math.isinf(total_xp):
        raise ValueError('total_xp must be finite')
    if total_xp < 0:
        raise ValueError('total_xp cannot be negative')

    level = 1
    remaining = total_xp
    if isinstance(remaining, float):
        # Strip summation noise such as 299.9999999 before placing the total
        remaining = round(remaining, 6)
    while remaining >= span_xp * level:
        remaining -= span_xp * level
        level += 1

    needed = span_xp * level
    to_next = needed - remaining
    if isinstance(remaining, float):
        remaining = round(remaining, 6)
        to_next = round(to_next, 6)

    return LevelInfo(
        level=level,
        xp_into_level=remaining,
        xp_needed_for_level=needed,
        xp_to_next_level=to_next,
    )
