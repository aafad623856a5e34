from .goal_service import GoalService
from .goal_store import GoalStore

__all__ = ['GoalService', 'GoalStore']
