"""Database models package for GoalQuest."""

from ..db_instance import db

from .user import User

__all__ = [
    'db',
    'User',
]
