"""Shared pytest fixtures for timeblocker tests."""

import tempfile
import os
from dataclasses import replace
import pytest

from timeblocker.database.factories import create_sqlite_store
from timeblocker.domain.days import DayService
from timeblocker.domain.entities import Track
from timeblocker.domain.statistics import StatisticsService
from timeblocker.domain.sub_activities import SubActivityService
from timeblocker.domain.time_grid import generate_canonical_day, slot_index


@pytest.fixture
def temp_db():
    """Create a temporary store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def day_service(temp_db):
    """Create a DayService with a temporary store."""
    return DayService(temp_db)


@pytest.fixture
def sub_activity_service(temp_db):
    """Create a SubActivityService with a temporary store."""
    return SubActivityService(temp_db)


@pytest.fixture
def statistics_service(temp_db):
    """Create a StatisticsService with a temporary store."""
    return StatisticsService(temp_db)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def paint(slots, start, end, category_id, track=Track.PLAN, sub_activity_id=None, note=None):
    """Return slots with the labels [start, end) set on one track."""
    first = slot_index(*map(int, start.split(":")))
    last = slot_index(*map(int, end.split(":"))) if end != "24:00" else len(slots)
    field = "plan" if track == Track.PLAN else "actual"
    painted = list(slots)
    for index in range(first, last):
        changes = {
            f"{field}_category_id": category_id,
            f"{field}_sub_activity_id": sub_activity_id,
        }
        if note is not None:
            changes["note"] = note
        painted[index] = replace(painted[index], **changes)
    return tuple(painted)


@pytest.fixture
def empty_day():
    """A canonical empty day."""
    return generate_canonical_day()
