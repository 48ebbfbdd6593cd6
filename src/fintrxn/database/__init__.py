"""Database layer for fintrxn application."""

from fintrxn.database.base import Database
from fintrxn.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
