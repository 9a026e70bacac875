"""Fixtures for journal tests."""

from collections.abc import AsyncGenerator

import pytest
from factories import FakeClock

from inkwell.core.storage import LocalStorage
from inkwell.journal.backends import EntryDatabase, RemoteEntryTable


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def local_storage(tmp_path):
    return LocalStorage(base_path=str(tmp_path / "storage"))


@pytest.fixture
async def database() -> AsyncGenerator[EntryDatabase, None]:
    """In-memory SQLite database for the remote table."""
    db = EntryDatabase("sqlite+aiosqlite:///:memory:")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def table(database):
    return RemoteEntryTable(database)
