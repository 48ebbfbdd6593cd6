"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional

from fintrxn.database.sqlalchemy_db import SQLAlchemyDatabase

IN_MEMORY = ":memory:"


def default_database_path() -> Path:
    """Database file used when no path is configured.

    Lives in ``$FINTRXN_HOME`` when set, otherwise in ``~/.fintrxn``. The
    directory is created on first use.
    """
    home = os.environ.get("FINTRXN_HOME")
    db_dir = Path(home).expanduser() if home else Path.home() / ".fintrxn"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / "fintrxn.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to the database file, or ``:memory:`` for a
            throwaway in-memory database. Falls back to ``FINTRXN_DB_PATH``,
            then to :func:`default_database_path`.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_path = database_path or os.environ.get("FINTRXN_DB_PATH")
    if database_path == IN_MEMORY:
        return SQLAlchemyDatabase("sqlite://")
    if not database_path:
        database_path = default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{Path(database_path).expanduser()}")
