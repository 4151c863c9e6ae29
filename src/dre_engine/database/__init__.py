"""Database layer for the DRE engine."""

from dre_engine.database.base import Database
from dre_engine.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
