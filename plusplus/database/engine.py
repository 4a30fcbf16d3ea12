"""
plusplus.database.engine — Database Connection & Async Helper
==============================================================

**Why this file exists:**
Slack events arrive on an ``asyncio`` event loop, but SQLAlchemy (and boto3)
are **synchronous**.  Calling them directly from a listener would freeze the
bot until the query returns.

The bridge is :func:`run_db`:

    1. A ``message`` event fires (async world).
    2. The intent handler calls ``await run_db(store.add_points, key, 1, True)``.
    3. ``run_db`` ships the call to the default thread pool via
       ``asyncio.to_thread()``.
    4. The store does its blocking I/O on that thread; the loop stays free.

Usage::

    from plusplus.database.engine import create_db_engine, init_db, run_db

    engine = create_db_engine("karma.db")
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS …

    total = await run_db(store.get_points, "U123456")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from plusplus.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Seconds a writer waits on SQLite's file lock before giving up.
SQLITE_BUSY_TIMEOUT = 30


# ---------------------------------------------------------------------------
# URL normalization
# ---------------------------------------------------------------------------
def normalize_database_url(database_url: str) -> str:
    """Turn a bare SQLite path into a SQLAlchemy URL.

    * ``":memory:"``          → ``"sqlite://"``
    * ``"/var/lib/karma.db"`` → ``"sqlite:////var/lib/karma.db"``
    * anything containing ``"://"`` is returned unchanged.
    """
    if not database_url:
        raise RuntimeError(
            "DATABASE_URL is not set.  "
            "Set it to a SQLite file path (e.g. ./karma.db) or a SQLAlchemy URL."
        )
    if "://" in database_url:
        return database_url
    if database_url == ":memory:":
        return "sqlite://"
    return f"sqlite:///{database_url}"


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy :class:`Engine` for *database_url*.

    SQLite in-memory databases use a single shared connection
    (``StaticPool``) so every worker thread sees the same data.  File-backed
    SQLite gets a busy timeout so concurrent writers queue on the file lock
    instead of failing.  Server databases get the usual small pool.
    """
    url = make_url(normalize_database_url(database_url))

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            engine = create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
            )
    else:
        engine = create_engine(
            url,
            echo=False,        # Set True for SQL debugging
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,   # Reconnect stale connections automatically
            pool_timeout=10,
            pool_recycle=3600,
        )

    logger.info("Database engine created → %s", url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create the ``user_points`` table if it does not exist yet.

    Safe to call on every startup.  Deployments that manage the schema with
    Alembic (``alembic upgrade head``) end up with the same table.
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run a **synchronous** storage call on a background thread.

    Parameters
    ----------
    func:
        Any sync callable, typically a :class:`~plusplus.store.base.PointStore`
        method.
    *args, **kwargs:
        Forwarded to *func*.

    Returns
    -------
    T
        Whatever *func* returns.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
