"""
plusplus.services.messages — Reply templates & flavor text
===========================================================

All reply wording lives in ``plusplus/data/messages.json`` so the handler
only supplies data — no phrasing concerns.

Placeholders:
- ``{thing}``          → the target mention (``<@U123>`` or ``:sake:``)
- ``{points_string}``  → ``"<n> points"``

PLUS and MINUS replies get a random reaction prefixed (``"Woohoo! …"``).
"""

from __future__ import annotations

import json
import random
import threading
from dataclasses import dataclass
from importlib import resources

from plusplus.services.karma_service import KarmaReply, ReplyKind

__all__ = ["MessageCatalog", "format_reply", "load_catalog"]


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    """Template lists loaded from ``messages.json`` (``self`` → ``self_rejected``)."""

    plus: tuple[str, ...]
    plus_points: tuple[str, ...]
    minus: tuple[str, ...]
    minus_points: tuple[str, ...]
    equals: tuple[str, ...]
    self_rejected: tuple[str, ...]


def load_catalog(raw: str | None = None) -> MessageCatalog:
    """Parse *raw* JSON, or the bundled ``messages.json`` when omitted."""
    if raw is None:
        raw = resources.files("plusplus").joinpath("data/messages.json").read_text(encoding="utf-8")
    data = json.loads(raw)
    return MessageCatalog(
        plus=tuple(data["plus"]),
        plus_points=tuple(data["plus_points"]),
        minus=tuple(data["minus"]),
        minus_points=tuple(data["minus_points"]),
        equals=tuple(data["equals"]),
        self_rejected=tuple(data["self"]),
    )


# ---------------------------------------------------------------------------
# Process-wide state, initialized once at import
# ---------------------------------------------------------------------------
_catalog = load_catalog()
_rng = random.Random()
_rng_lock = threading.Lock()


def _pick(options: tuple[str, ...]) -> str:
    with _rng_lock:
        return _rng.choice(options)


def format_reply(reply: KarmaReply, catalog: MessageCatalog | None = None) -> str:
    """Render *reply* into the literal text posted to the channel."""
    catalog = catalog or _catalog

    reaction = ""
    if reply.kind is ReplyKind.PLUS:
        reaction = _pick(catalog.plus)
        template = _pick(catalog.plus_points)
    elif reply.kind is ReplyKind.MINUS:
        reaction = _pick(catalog.minus)
        template = _pick(catalog.minus_points)
    elif reply.kind is ReplyKind.EQUALS:
        template = _pick(catalog.equals)
    else:
        template = _pick(catalog.self_rejected)

    message = template.replace("{thing}", reply.target.mention)
    message = message.replace("{points_string}", f"{reply.points} points")
    if reaction:
        message = f"{reaction} {message}"
    return message
