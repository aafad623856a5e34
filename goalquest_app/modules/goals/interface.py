from typing import List, Optional

from flask_login import current_user

from .schemas import GoalRecord
from .services.goal_store import GoalStore


def current_owner_id() -> Optional[int]:
    """Owner scope of the current request; None means the guest scope."""
    if current_user and current_user.is_authenticated:
        return current_user.user_id
    return None


def get_owner_records(owner_id: Optional[int]) -> List[GoalRecord]:
    """All records of an owner, newest first. Used by the gamification module."""
    return GoalStore().list_records(owner_id)
