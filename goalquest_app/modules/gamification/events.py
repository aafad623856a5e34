"""
Event Handlers for Gamification Module.

Listens to signals from the goals module. The goals module never imports
gamification code; it only announces what happened to a record.
"""
from flask import current_app

from goalquest_app.core.signals import goal_completed, goal_progress_logged, goal_reopened


@goal_completed.connect
def on_goal_completed(sender, **kwargs):
    """
    Handle goal_completed signal from the goals module.

    Expected kwargs:
        - owner_id: int or None (guest scope)
        - goal_id: str
        - title: str
        - xp: float
        - message: str
    """
    current_app.logger.info(
        f"[Gamification] {kwargs.get('message')} "
        f"(owner={kwargs.get('owner_id')}, goal={kwargs.get('goal_id')})"
    )


@goal_progress_logged.connect
def on_goal_progress_logged(sender, **kwargs):
    """Handle goal_progress_logged signal: partial XP was gained."""
    current_app.logger.info(
        f"[Gamification] {kwargs.get('message')} "
        f"(owner={kwargs.get('owner_id')}, goal={kwargs.get('goal_id')})"
    )


@goal_reopened.connect
def on_goal_reopened(sender, **kwargs):
    current_app.logger.debug(
        f"[Gamification] Goal reopened: owner={kwargs.get('owner_id')}, goal={kwargs.get('goal_id')}"
    )
