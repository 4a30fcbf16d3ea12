"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine

from plusplus.database.engine import create_db_engine
from plusplus.store.sqlite_store import SQLiteStore


class FakeAccounts:
    """In-memory :class:`AccountDirectory` — ids in *bots* are automated."""

    def __init__(self, bots: set[str] | None = None) -> None:
        self.bots = bots or set()
        self.lookups: list[str] = []

    async def is_automated(self, user_id: str) -> bool:
        self.lookups.append(user_id)
        return user_id in self.bots


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine shared across threads (StaticPool).

    ``run_db`` ships store calls to worker threads, so every thread must
    see the same in-memory database.
    """
    engine = create_db_engine(":memory:")
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine: Engine) -> SQLiteStore:
    """A SQLite point store with an empty ``user_points`` table."""
    s = SQLiteStore(db_engine)
    yield s
    s.close()


@pytest.fixture
def file_store(tmp_path) -> SQLiteStore:
    """A SQLite point store backed by a real file (pooled connections)."""
    s = SQLiteStore.from_url(str(tmp_path / "plusplus-test.db"))
    yield s
    s.close()


@pytest.fixture
def accounts() -> FakeAccounts:
    return FakeAccounts(bots={"B0BOT"})
