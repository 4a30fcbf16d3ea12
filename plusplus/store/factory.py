"""
plusplus.store.factory — Backend selection
============================================

Turns a :class:`~plusplus.config.PlusPlusConfig` into a connected
:class:`~plusplus.store.base.PointStore`.  Nothing else in the package
parses connection settings.
"""

from __future__ import annotations

import logging

from plusplus.config import PlusPlusConfig, StoreType
from plusplus.store.base import PointStore
from plusplus.store.dynamodb_store import DynamoDBStore
from plusplus.store.sqlite_store import SQLiteStore

logger = logging.getLogger(__name__)


def create_point_store(cfg: PlusPlusConfig) -> PointStore:
    """Build the store named by ``cfg.store_type``.

    Raises
    ------
    ValueError
        If the store type is unknown, or SQLite is selected without a
        ``DATABASE_URL``.
    StoreError
        If the backend cannot be reached or initialized.
    """
    if cfg.store_type == StoreType.SQLITE:
        if not cfg.database_url:
            raise ValueError("DATABASE_URL environment variable is not set")
        logger.info("Using SQLite point store")
        return SQLiteStore.from_url(cfg.database_url)

    if cfg.store_type == StoreType.DYNAMODB:
        logger.info("Using DynamoDB point store (table=%s)", cfg.dynamodb_table)
        return DynamoDBStore.connect(
            cfg.dynamodb_table,
            local=cfg.dynamodb_local,
            region=cfg.aws_region,
        )

    raise ValueError(f"unsupported repository type: {cfg.store_type}")
