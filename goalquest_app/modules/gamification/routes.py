from goalquest_app.core.error_handlers import success_response
from goalquest_app.modules.goals.interface import current_owner_id
from goalquest_app.utils.time_utils import utcnow
from . import gamification_api_bp
from .services.stats_service import StatsService


@gamification_api_bp.route('/stats', methods=['GET'])
def get_stats_api():
    """Level, streaks, XP windows and achievements of the current owner."""
    return success_response(data=StatsService.get_dashboard(current_owner_id(), now=utcnow()))
