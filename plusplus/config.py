"""
plusplus.config — YAML + Environment Configuration Loader
==========================================================

Reads ``config.yaml`` (optional) for storage settings and lets environment
variables override every key.  Slack tokens are secrets and are read from the
environment only (``.env`` is loaded by the entry point).

Recognised environment variables:

=========================  ===============================================
``REPOSITORY_TYPE``        ``sqlite`` (default) or ``dynamodb``
``DATABASE_URL``           SQLite file path, ``:memory:`` or SQLAlchemy URL
``DYNAMO_USER_POINTS_TABLE``  DynamoDB table name (default ``user_points``)
``DYNAMO_LOCAL``           Any non-empty value → DynamoDB Local
``AWS_REGION``             Region for the managed DynamoDB service
``DEBUG``                  Any non-empty value → debug logging
=========================  ===============================================

Usage::

    from plusplus.config import load_config

    cfg = load_config()            # reads ./config.yaml if it exists
    print(cfg.store_type)          # StoreType.SQLITE
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "user_points"


class StoreType(enum.StrEnum):
    """Backing store implementations selectable at startup."""
    SQLITE = "sqlite"
    DYNAMODB = "dynamodb"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class PlusPlusConfig:
    """Immutable configuration resolved from ``config.yaml`` and the env."""

    store_type: StoreType = StoreType.SQLITE
    database_url: str = ""
    dynamodb_table: str = DEFAULT_TABLE_NAME
    dynamodb_local: bool = False
    aws_region: str | None = None
    debug: bool = False


def _env_flag(name: str) -> bool | None:
    """``None`` when *name* is unset, else whether it is non-empty."""
    if name not in os.environ:
        return None
    return os.environ[name] != ""


def _read_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        logger.debug("No config file at %s — using environment only", config_path)
        return {}
    with open(config_path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping at the top level")
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path = "config.yaml") -> PlusPlusConfig:
    """Read *path* (if present), apply env overrides, return a config.

    Raises
    ------
    ValueError
        If the file is not a YAML mapping, or the resolved store type is
        not one of :class:`StoreType`.
    """
    raw = _read_yaml(Path(path))

    store_type = os.getenv("REPOSITORY_TYPE") or raw.get("repository_type") or StoreType.SQLITE
    try:
        store_type = StoreType(str(store_type).lower())
    except ValueError:
        raise ValueError(f"unsupported repository type: {store_type}") from None

    dynamodb_local = _env_flag("DYNAMO_LOCAL")
    if dynamodb_local is None:
        dynamodb_local = bool(raw.get("dynamodb_local", False))

    debug = _env_flag("DEBUG")
    if debug is None:
        debug = bool(raw.get("debug", False))

    return PlusPlusConfig(
        store_type=store_type,
        database_url=os.getenv("DATABASE_URL") or str(raw.get("database_url") or ""),
        dynamodb_table=(
            os.getenv("DYNAMO_USER_POINTS_TABLE")
            or raw.get("dynamodb_table")
            or DEFAULT_TABLE_NAME
        ),
        dynamodb_local=dynamodb_local,
        aws_region=os.getenv("AWS_REGION") or raw.get("aws_region") or None,
        debug=debug,
    )
