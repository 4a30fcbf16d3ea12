"""
plusplus.store.base — Point Store contract
============================================

Every backend (embedded SQLite file, managed DynamoDB table) satisfies the
same three-call contract.  The intent handler only ever sees this protocol.

Invariants every implementation upholds:

* ``add_points`` is a single atomic insert-or-accumulate.  Concurrent callers
  on the same key never lose an update; the stored total is always the sum
  of every delta ever applied.
* ``get_points`` on an unknown key returns ``0`` — absence is not an error.
* Any I/O failure surfaces as :class:`~plusplus.errors.StoreError`.  Stores
  never retry; that belongs to the caller or the client library.
* ``close`` may be called more than once.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["PointStore"]


@runtime_checkable
class PointStore(Protocol):
    """Durable keyed counter shared by users and emoji."""

    def add_points(self, key: str, delta: int, is_user: bool) -> None:
        """Create *key* with ``points = delta`` or add *delta* to it."""
        ...

    def get_points(self, key: str) -> int:
        """Current total for *key*, ``0`` if it was never written."""
        ...

    def close(self) -> None:
        """Release connections held by the store."""
        ...
