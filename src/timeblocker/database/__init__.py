"""Storage layer for timeblocker application."""

from timeblocker.database.base import KeyValueStore
from timeblocker.database.factories import create_sqlite_store

__all__ = ["KeyValueStore", "create_sqlite_store"]
