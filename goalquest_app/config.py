# File: goalquest_app/config.py
# Runtime configuration for the Flask application.

import os

# The project root sits one level above the goalquest_app package.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Default SQLite database file, kept under database/ at the project root
DATABASE_PATH = os.path.join(BASE_DIR, "database", "goalquest.db")


class Config:
    """
    Configuration class for the Flask application.
    """
    # Secret key protecting the session cookie
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_very_secret_key_for_goalquest'

    # Record store; any SQLAlchemy URL works, SQLite is the default
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f'sqlite:///{DATABASE_PATH}'

    # Event tracking is not used and costs memory
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Pragmas applied to each SQLite connection; empty values are skipped
    SQLITE_JOURNAL_MODE = os.environ.get('SQLITE_JOURNAL_MODE', 'WAL')
    SQLITE_SYNCHRONOUS = os.environ.get('SQLITE_SYNCHRONOUS', 'NORMAL')
    SQLITE_BUSY_TIMEOUT_MS = int(os.environ.get('SQLITE_BUSY_TIMEOUT_MS', 30000))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON = os.environ.get('LOG_JSON', '').lower() in ('1', 'true', 'yes')

    # Leveling: level n spans LEVEL_SPAN_XP * n experience points
    LEVEL_SPAN_XP = 100

    # Aggregation windows for the XP summary, measured against updated_at
    WEEKLY_WINDOW_DAYS = 7
    MONTHLY_WINDOW_DAYS = 30

    # Make sure the database directory exists when the default SQLite file is used
    if SQLALCHEMY_DATABASE_URI.startswith('sqlite:///'):
        os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
