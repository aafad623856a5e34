"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask

from ..db_instance import install_sqlite_pragmas
from ..extensions import csrf_protect, db, login_manager, migrate
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure application logging.

    Outside of tests the app logger writes to the console and a rotating log
    file. Tests only get a console handler, and only if none is present.
    """

    if not app.config.get("TESTING"):
        setup_logging(
            app,
            log_level=app.config.get("LOG_LEVEL", "INFO"),
            log_dir=app.config.get("LOG_DIR"),
            json_format=bool(app.config.get("LOG_JSON")),
        )
        return

    if app.logger.handlers:
        return

    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)
    migrate.init_app(app, db)


def register_user_loader(app: Flask) -> None:
    """Let Flask-Login resolve the owner of the current session."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables for every registered model."""

    # Import models so their tables are known to the metadata
    from .. import models  # noqa: F401
    from ..modules.goals import models as goal_models  # noqa: F401

    install_sqlite_pragmas(app)
    db.create_all()
    app.logger.info("Database tables are ready at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))
