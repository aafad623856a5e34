from flask import Blueprint

gamification_api_bp = Blueprint('gamification_api', __name__)

from . import routes, events  # noqa: E402,F401  # isort:skip
