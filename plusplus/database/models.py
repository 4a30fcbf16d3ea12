"""
plusplus.database.models — SQLAlchemy 2.0 Data Models
======================================================

Tables:
- user_points — Current point total per target key (user id or emoji name)

User ids and emoji names share the ``key`` column.  Slack user ids are
upper-case alphanumerics and emoji shortcodes are conventionally lower-case,
so the two never collide in practice, but nothing here enforces it.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func, true
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all PlusPlus ORM models."""


# ---------------------------------------------------------------------------
# User points — one row per karma target
# ---------------------------------------------------------------------------
class UserPoints(Base):
    __tablename__ = "user_points"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_user: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserPoints key={self.key!r} points={self.points} is_user={self.is_user}>"
