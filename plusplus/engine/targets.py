"""
plusplus.engine.targets — Target Extraction
=============================================

Finds *who or what* a message is talking about.  A target is either a Slack
user mention (``<@U123ABC>``) or an emoji shortcode (``:sake:``).

Rules:
- Only the first match of each kind is considered.
- A user mention always wins over an emoji, wherever they sit in the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "EmojiTarget",
    "Target",
    "UserTarget",
    "extract_emoji_name",
    "extract_target",
    "extract_user_id",
]

# ``<@U123456>`` — upper-case letters and digits only.
USER_MENTION = r"<@([A-Z0-9]+)>"
# ``:beer_mug:`` / ``:+1:`` / ``:man-bowing:``
EMOJI_SHORTCODE = r":([a-zA-Z0-9_+-]+):"

_USER_RE = re.compile(USER_MENTION)
_EMOJI_RE = re.compile(EMOJI_SHORTCODE)


@dataclass(frozen=True, slots=True)
class UserTarget:
    """A workspace account referenced by its opaque user id."""

    id: str

    @property
    def key(self) -> str:
        return self.id

    @property
    def is_user(self) -> bool:
        return True

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"


@dataclass(frozen=True, slots=True)
class EmojiTarget:
    """An emoji referenced by its shortcode (without the colons)."""

    name: str

    @property
    def key(self) -> str:
        return self.name

    @property
    def is_user(self) -> bool:
        return False

    @property
    def mention(self) -> str:
        return f":{self.name}:"


Target = UserTarget | EmojiTarget


def extract_user_id(text: str) -> str:
    """Return the first mentioned user id, or ``""``."""
    match = _USER_RE.search(text)
    return match.group(1) if match else ""


def extract_emoji_name(text: str) -> str:
    """Return the first emoji shortcode (``":sake: ++"`` → ``"sake"``), or ``""``."""
    match = _EMOJI_RE.search(text)
    return match.group(1) if match else ""


def extract_target(text: str) -> Target | None:
    """Resolve the single target of *text*, user mentions first."""
    user_id = extract_user_id(text)
    if user_id:
        return UserTarget(user_id)

    emoji_name = extract_emoji_name(text)
    if emoji_name:
        return EmojiTarget(emoji_name)

    return None
