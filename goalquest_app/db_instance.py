# File: goalquest_app/db_instance.py
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

db = SQLAlchemy()


def sqlite_pragmas(config) -> list:
    """Build the PRAGMA statements requested by the SQLITE_* settings."""

    pragmas = []
    journal_mode = config.get("SQLITE_JOURNAL_MODE")
    if journal_mode:
        pragmas.append(f"PRAGMA journal_mode={journal_mode};")
    synchronous = config.get("SQLITE_SYNCHRONOUS")
    if synchronous:
        pragmas.append(f"PRAGMA synchronous={synchronous};")
    busy_timeout = config.get("SQLITE_BUSY_TIMEOUT_MS")
    if busy_timeout is not None:
        pragmas.append(f"PRAGMA busy_timeout={int(busy_timeout)};")
    return pragmas


def install_sqlite_pragmas(app) -> None:
    """Run the configured pragmas on every new connection of the app's SQLite engine.

    Must be called inside an application context.
    """

    engine = db.engine
    pragmas = sqlite_pragmas(app.config)
    if engine.dialect.name != "sqlite" or not pragmas:
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        try:
            for pragma in pragmas:
                cursor.execute(pragma)
        finally:
            cursor.close()
