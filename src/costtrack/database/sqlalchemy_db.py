"""SQLAlchemy-backed configuration store."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from costtrack.database.base import ConfigStore
from costtrack.database.models import Setting, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyConfigStore(ConfigStore):
    """SQLAlchemy-based implementation of ConfigStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy config store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def get_list(self, key: str) -> list[str]:
        """Get the list stored under key, or an empty list if unset."""
        session = self._get_session()
        setting = session.get(Setting, key)
        if setting is None or not isinstance(setting.value, list):
            return []
        return [str(value) for value in setting.value]

    def set_list(self, key: str, values: list[str]) -> None:
        """Replace the list stored under key in a single commit."""
        session = self._get_session()
        setting = session.get(Setting, key)
        if setting is None:
            session.add(Setting(key=key, value=list(values)))
        else:
            setting.value = list(values)
        try:
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.info("Saved %d values to setting '%s'", len(values), key)
