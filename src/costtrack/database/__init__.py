"""Configuration storage for costtrack."""

from costtrack.database.base import ConfigStore, MemoryConfigStore
from costtrack.database.factories import create_sqlite_config_store

__all__ = ["ConfigStore", "MemoryConfigStore", "create_sqlite_config_store"]
