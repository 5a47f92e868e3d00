"""Locating and opening the production-line configuration database."""

import os
from pathlib import Path
from typing import Optional

from costtrack.database.sqlalchemy_db import SQLAlchemyConfigStore

DB_PATH_ENV = "COSTTRACK_DB_PATH"
DEFAULT_DB_FILENAME = "costtrack.db"


def default_config_path() -> Path:
    """Per-user location of the configuration database."""
    return Path.home() / ".costtrack" / DEFAULT_DB_FILENAME


def resolve_config_path(database_path: Optional[str] = None) -> Path:
    """Pick the configuration database file.

    An explicit path wins over COSTTRACK_DB_PATH, which wins over the
    per-user default. The parent directory is created so SQLite can open
    the file.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    path = Path(chosen).expanduser() if chosen else default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_config_store(database_path: Optional[str] = None) -> SQLAlchemyConfigStore:
    """Open the store that keeps saved settings such as the production lines.

    Args:
        database_path: SQLite file to use; see resolve_config_path for the
            fallbacks when omitted

    Returns:
        SQLAlchemyConfigStore backed by that file
    """
    return SQLAlchemyConfigStore(f"sqlite:///{resolve_config_path(database_path)}")
