"""Blueprint registration for the goals module."""

from flask import Blueprint


goals_api_bp = Blueprint('goals_api', __name__)

from . import routes  # noqa: E402  # isort:skip
