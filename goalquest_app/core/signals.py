"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker to let the goals module announce record changes without
knowing who listens.

Usage:
    # Publisher (sender)
    from goalquest_app.core.signals import goal_completed
    goal_completed.send(None, owner_id=1, goal_id='...', xp=20, ...)

    # Subscriber (receiver) - in module's events.py
    @goal_completed.connect
    def on_goal_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

goal_signals = Namespace()

# Signal: Fired when a record transitions to completed
# Payload: owner_id, goal_id, title, xp, message
goal_completed = goal_signals.signal('goal_completed')

# Signal: Fired when logged progress raised the XP of an incomplete record
# Payload: owner_id, goal_id, title, xp, message
goal_progress_logged = goal_signals.signal('goal_progress_logged')

# Signal: Fired when a completed record is reopened
# Payload: owner_id, goal_id, title, xp, message
goal_reopened = goal_signals.signal('goal_reopened')
