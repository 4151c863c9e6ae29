"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from dre_engine.database.sqlalchemy_db import SQLAlchemyDatabase

# Environment variable read by the CLI --db-path option and by the factory
DB_PATH_ENVVAR = "DRE_DB_PATH"

DEFAULT_DB_DIR = Path("~/.dre")
DEFAULT_DB_FILENAME = "dre.db"


def default_database_path() -> Path:
    """Return the per-user database location, creating its directory."""
    db_dir = DEFAULT_DB_DIR.expanduser()
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / DEFAULT_DB_FILENAME


def sqlite_url(database_path: str | Path) -> str:
    """Build the SQLAlchemy URL of a SQLite file."""
    return f"sqlite:///{database_path}"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database.

    The location is the first of: database_path, the DRE_DB_PATH environment
    variable, ~/.dre/dre.db.
    """
    location = database_path or os.environ.get(DB_PATH_ENVVAR) or default_database_path()
    return SQLAlchemyDatabase(sqlite_url(location))
