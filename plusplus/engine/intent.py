"""
plusplus.engine.intent — Point Operation Detector
===================================================

Classifies a message as a point increment (``++``), decrement (``--``),
score query (``==``) or nothing at all.

A token only counts when it directly follows a target marker — a user
mention or an emoji shortcode — with at most a run of ASCII or full-width
(U+3000) spaces in between.  Newlines break the match, so ``<@U1>\\n++``
is not an operation.

Precedence is fixed: any increment pattern wins, then decrement, then query.
"""

from __future__ import annotations

import enum
import re

from plusplus.engine.targets import EMOJI_SHORTCODE, USER_MENTION

__all__ = ["Operation", "detect_operation"]

# Space run allowed between a marker and its token.
_GAP = "[ \u3000]*"

# Markers without capture groups; only presence matters here.
_MARKERS = (
    USER_MENTION.replace("(", "").replace(")", ""),
    EMOJI_SHORTCODE.replace("(", "").replace(")", ""),
)


class Operation(enum.Enum):
    """What a message asks us to do with a target's points."""
    NONE = "none"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    QUERY = "query"

    @property
    def delta(self) -> int:
        """Signed point change; 0 for operations that do not mutate."""
        return _DELTAS.get(self, 0)


_DELTAS: dict[Operation, int] = {
    Operation.INCREMENT: 1,
    Operation.DECREMENT: -1,
}


def _compile(token: str) -> list[re.Pattern[str]]:
    return [re.compile(marker + _GAP + re.escape(token)) for marker in _MARKERS]


# Checked in this order; the first family with any hit decides.
_PATTERNS: list[tuple[Operation, list[re.Pattern[str]]]] = [
    (Operation.INCREMENT, _compile("++")),
    (Operation.DECREMENT, _compile("--")),
    (Operation.QUERY, _compile("==")),
]


def detect_operation(text: str) -> Operation:
    """Return the :class:`Operation` requested by *text*.

    Never raises; malformed markers (``:sake +``, ``<U1>++``) simply
    yield :attr:`Operation.NONE`.
    """
    for operation, patterns in _PATTERNS:
        if any(p.search(text) for p in patterns):
            return operation
    return Operation.NONE
