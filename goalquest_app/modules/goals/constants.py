"""Shared configuration for goals and habits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HabitType(str, Enum):
    ONE_TIME = 'one_time'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    CUSTOM = 'custom'


@dataclass(frozen=True)
class HabitTypeRule:
    """Per-type behaviour of a record."""

    label: str
    is_habit: bool


HABIT_TYPE_RULES: dict[HabitType, HabitTypeRule] = {
    HabitType.ONE_TIME: HabitTypeRule(label='One-time goal', is_habit=False),
    HabitType.DAILY: HabitTypeRule(label='Daily', is_habit=True),
    HabitType.WEEKLY: HabitTypeRule(label='Weekly', is_habit=True),
    HabitType.MONTHLY: HabitTypeRule(label='Monthly', is_habit=True),
    HabitType.CUSTOM: HabitTypeRule(label='Custom', is_habit=True),
}


def rule_for(habit_type) -> HabitTypeRule:
    """Look up the behaviour rule for a habit type value or enum member."""
    return HABIT_TYPE_RULES[HabitType(habit_type)]


HABIT_TYPE_CHOICES: list[tuple[str, str]] = [
    (habit_type.value, rule.label) for habit_type, rule in HABIT_TYPE_RULES.items()
]

XP_VALUE_MIN = 1
XP_VALUE_MAX = 100
DEFAULT_XP_VALUE = 10

# Habits are completed with a single tap
HABIT_TARGET_VALUE = 1
HABIT_UNIT = 'completion'

VIEW_CHOICES = ('all', 'goals', 'habits')
STATUS_CHOICES = ('all', 'active', 'completed')
SORT_CHOICES = ('created', 'deadline', 'progress', 'xp')
SORT_ORDER_CHOICES = ('asc', 'desc')
