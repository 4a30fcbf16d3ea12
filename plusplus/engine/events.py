"""
plusplus.engine.events — MessageEvent envelope
================================================

Every Slack ``message`` payload is normalized into a :class:`MessageEvent`
before the intent handler looks at it, so the handler never touches raw
Slack dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["MessageEvent"]


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """One delivered chat message."""

    text: str
    author_id: str
    channel_id: str
    thread_ts: str | None = None
    bot_id: str | None = None
    subtype: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> MessageEvent:
        """Build an event from a Slack Events API ``message`` payload."""
        return cls(
            text=payload.get("text") or "",
            author_id=payload.get("user") or "",
            channel_id=payload.get("channel") or "",
            thread_ts=payload.get("thread_ts"),
            bot_id=payload.get("bot_id"),
            subtype=payload.get("subtype"),
        )

    @property
    def is_from_bot(self) -> bool:
        return bool(self.bot_id) or self.subtype == "bot_message"
