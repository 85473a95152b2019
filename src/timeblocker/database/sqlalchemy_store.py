"""Generic SQLAlchemy key-value store implementation."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from timeblocker.database.base import KeyValueStore
from timeblocker.database.models import Entry, create_session_factory

logger = logging.getLogger(__name__)


class SQLAlchemyStore(KeyValueStore):
    """SQLAlchemy-based implementation of the KeyValueStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

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
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None if absent."""
        session = self._get_session()
        entry = session.get(Entry, key)
        if entry is None:
            return None
        return entry.value

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        session = self._get_session()
        entry = session.get(Entry, key)
        if entry is None:
            session.add(Entry(key=key, value=value))
        else:
            entry.value = value
        session.commit()
        logger.debug("Stored %s (%d chars)", key, len(value))

    def delete(self, key: str) -> bool:
        """Delete key. Returns True if a value was removed."""
        session = self._get_session()
        entry = session.get(Entry, key)
        if entry is None:
            return False
        session.delete(entry)
        session.commit()
        return True

    def list_keys(self, prefix: Optional[str] = None) -> list[str]:
        """List stored keys in ascending order, optionally filtered by prefix."""
        session = self._get_session()
        query = session.query(Entry.key)
        if prefix is not None:
            query = query.filter(Entry.key.startswith(prefix, autoescape=True))
        return [key for (key,) in query.order_by(Entry.key).all()]
