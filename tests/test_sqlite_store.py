"""
tests/test_sqlite_store.py — SQLite Point Store Tests
======================================================

Covers the store contract against SQLite: accumulate-on-conflict, zero for
unknown keys, last-writer classification, server-assigned timestamps,
concurrent writers, and error wrapping.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select, text, update
from sqlalchemy.orm import Session

from plusplus.database.engine import normalize_database_url, run_db
from plusplus.database.models import UserPoints
from plusplus.errors import StoreError
from plusplus.store.base import PointStore
from plusplus.store.sqlite_store import SQLiteStore


def _row(store: SQLiteStore, key: str) -> UserPoints | None:
    with Session(store.engine) as session:
        row = session.scalar(select(UserPoints).where(UserPoints.key == key))
        if row is not None:
            session.expunge(row)
        return row


class TestAddPoints:
    def test_new_key_starts_at_delta(self, store):
        store.add_points("user1", 10, True)
        assert store.get_points("user1") == 10

    def test_existing_key_accumulates(self, store):
        store.add_points("user1", 10, True)
        store.add_points("user1", 5, True)
        assert store.get_points("user1") == 15

    def test_negative_totals(self, store):
        store.add_points("sake", -1, False)
        store.add_points("sake", -1, False)
        assert store.get_points("sake") == -2

    def test_keys_are_independent(self, store):
        store.add_points("user1", 20, True)
        store.add_points("bot1", 3, False)
        assert store.get_points("user1") == 20
        assert store.get_points("bot1") == 3

    def test_single_row_per_key(self, store):
        for _ in range(3):
            store.add_points("user1", 1, True)
        with Session(store.engine) as session:
            rows = session.scalars(select(UserPoints).where(UserPoints.key == "user1")).all()
        assert len(rows) == 1

    def test_is_user_is_overwritten_by_last_write(self, store):
        store.add_points("U1", 1, True)
        assert _row(store, "U1").is_user is True
        store.add_points("U1", 1, False)
        assert _row(store, "U1").is_user is False

    def test_last_modified_refreshed_on_write(self, store):
        store.add_points("U1", 1, True)
        with Session(store.engine) as session:
            session.execute(
                update(UserPoints)
                .where(UserPoints.key == "U1")
                .values(last_modified=datetime(2000, 1, 1))
            )
            session.commit()

        store.add_points("U1", 1, True)
        assert _row(store, "U1").last_modified.year > 2000


class TestGetPoints:
    def test_unknown_key_is_zero(self, store):
        assert store.get_points("nonexistent") == 0

    def test_read_does_not_create_row(self, store):
        store.get_points("ghost")
        assert _row(store, "ghost") is None


class TestConcurrency:
    def test_threads_do_not_lose_updates(self, file_store):
        """N concurrent +1 writers on one key → initial + N."""
        file_store.add_points("U1", 7, True)
        n = 40
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: file_store.add_points("U1", 1, True), range(n)))
        assert file_store.get_points("U1") == 7 + n

    def test_async_fan_out_through_run_db(self, store):
        async def _burst():
            await asyncio.gather(
                *(run_db(store.add_points, "sake", 1, False) for _ in range(25)),
                *(run_db(store.add_points, "tea", -1, False) for _ in range(10)),
            )

        asyncio.run(_burst())
        assert store.get_points("sake") == 25
        assert store.get_points("tea") == -10


class TestLifecycle:
    def test_satisfies_protocol(self, store):
        assert isinstance(store, PointStore)

    def test_table_created_on_first_use(self, tmp_path):
        s = SQLiteStore.from_url(str(tmp_path / "fresh.db"))
        try:
            with s.engine.connect() as conn:
                names = conn.execute(
                    text("SELECT name FROM sqlite_master WHERE type='table'")
                ).scalars().all()
            assert "user_points" in names
        finally:
            s.close()

    def test_data_survives_reopen(self, tmp_path):
        path = str(tmp_path / "karma.db")
        first = SQLiteStore.from_url(path)
        first.add_points("U1", 4, True)
        first.close()

        second = SQLiteStore.from_url(path)
        try:
            assert second.get_points("U1") == 4
        finally:
            second.close()

    def test_close_twice_is_safe(self, store):
        store.close()
        store.close()

    def test_unsupported_dialect_rejected(self):
        engine = MagicMock()
        engine.dialect.name = "mysql"
        with pytest.raises(ValueError, match="mysql"):
            SQLiteStore(engine)


class TestErrors:
    def test_write_failure_raises_store_error(self, store):
        with store.engine.begin() as conn:
            conn.execute(text("DROP TABLE user_points"))
        with pytest.raises(StoreError):
            store.add_points("U1", 1, True)

    def test_read_failure_raises_store_error(self, store):
        with store.engine.begin() as conn:
            conn.execute(text("DROP TABLE user_points"))
        with pytest.raises(StoreError):
            store.get_points("U1")


class TestNormalizeDatabaseUrl:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (":memory:", "sqlite://"),
            ("karma.db", "sqlite:///karma.db"),
            ("/var/lib/karma.db", "sqlite:////var/lib/karma.db"),
            ("sqlite:///karma.db", "sqlite:///karma.db"),
            ("postgresql://u:p@db/karma", "postgresql://u:p@db/karma"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_database_url(raw) == expected

    def test_empty_url_rejected(self):
        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            normalize_database_url("")
