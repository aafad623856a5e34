from .board import GoalBoard, RecordNotOnBoard
from .filters import GoalFilters, categories, filter_records
from .progress_engine import (
    InvalidProgressValue,
    apply_progress_update,
    progress_ratio,
    round_xp,
    toggle_completion,
)

__all__ = [
    'GoalBoard',
    'RecordNotOnBoard',
    'GoalFilters',
    'categories',
    'filter_records',
    'InvalidProgressValue',
    'apply_progress_update',
    'progress_ratio',
    'round_xp',
    'toggle_completion',
]
