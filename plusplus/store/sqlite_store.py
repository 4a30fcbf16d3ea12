"""
plusplus.store.sqlite_store — Embedded relational Point Store
==============================================================

Backs the point counter with a single SQLite file through SQLAlchemy.

The write path is one statement::

    INSERT INTO user_points (key, points, is_user) VALUES (:key, :delta, :is_user)
    ON CONFLICT (key) DO UPDATE SET
        points = user_points.points + excluded.points,
        is_user = excluded.is_user,
        last_modified = CURRENT_TIMESTAMP

so the read-modify-write happens inside the database and concurrent writers
cannot lose updates.  The PostgreSQL dialect understands the same statement,
so a ``postgresql://`` URL works too.
"""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext

from sqlalchemy import Engine, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from plusplus.database.engine import create_db_engine, init_db
from plusplus.database.models import UserPoints
from plusplus.errors import StoreError

logger = logging.getLogger(__name__)

# Dialects with a native INSERT … ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SQLiteStore:
    """:class:`~plusplus.store.base.PointStore` over a SQLAlchemy engine.

    Parameters
    ----------
    engine:
        A SQLAlchemy engine.  The ``user_points`` table is created on
        construction if it does not exist.
    """

    def __init__(self, engine: Engine) -> None:
        dialect = engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise ValueError(f"unsupported database dialect for point store: {dialect}")
        self._engine = engine
        self._insert = _UPSERT_INSERTS[dialect]
        self._closed = False
        # A StaticPool hands every thread the same connection; transactions
        # on it must not interleave.
        self._lock = threading.Lock() if isinstance(engine.pool, StaticPool) else nullcontext()
        try:
            init_db(engine)
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to initialize user_points table: {exc}") from exc

    @classmethod
    def from_url(cls, database_url: str) -> SQLiteStore:
        """Open (or create) the database at *database_url*.

        Accepts a bare file path, ``":memory:"`` or a SQLAlchemy URL.
        """
        return cls(create_db_engine(database_url))

    @property
    def engine(self) -> Engine:
        return self._engine

    def add_points(self, key: str, delta: int, is_user: bool) -> None:
        stmt = self._insert(UserPoints).values(key=key, points=delta, is_user=is_user)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserPoints.key],
            set_={
                "points": UserPoints.points + stmt.excluded.points,
                "is_user": stmt.excluded.is_user,
                "last_modified": func.now(),
            },
        )
        try:
            with self._lock, Session(self._engine) as session:
                session.execute(stmt)
                session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to add {delta} points to {key!r}: {exc}") from exc
        logger.debug("Added %+d points to %s (is_user=%s)", delta, key, is_user)

    def get_points(self, key: str) -> int:
        try:
            with self._lock, Session(self._engine) as session:
                points = session.scalar(
                    select(UserPoints.points).where(UserPoints.key == key)
                )
        except SQLAlchemyError as exc:
            raise StoreError(f"failed to read points for {key!r}: {exc}") from exc
        return points if points is not None else 0

    def close(self) -> None:
        if self._closed:
            return
        self._engine.dispose()
        self._closed = True
        logger.info("SQLite point store closed.")
