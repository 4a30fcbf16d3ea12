"""
plusplus.services.karma_service — Intent Handler
=================================================

Decides what a single message does and describes the reply it deserves.

Pipeline:
1. Detect the operation (``++`` / ``--`` / ``==``) → nothing? stop silently.
2. Extract the target (user mention first, then emoji) → none? log, stop.
3. ``==`` → read the total and describe an EQUALS reply.
4. ``++``/``--`` on yourself → describe a SELF reply, touch nothing.
5. Classify the target: users are asked whether they are automated
   accounts; emoji are never user-kind.
6. Apply the ±1 delta, read the total back, describe a PLUS/MINUS reply.

Storage calls go through :func:`~plusplus.database.engine.run_db` so blocking
I/O never runs on the event loop.  Failures (:class:`StoreError`,
:class:`AccountLookupError`) propagate to the caller; no reply is described
for a message whose handling failed.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

from plusplus.database.engine import run_db
from plusplus.engine.events import MessageEvent
from plusplus.engine.intent import Operation, detect_operation
from plusplus.engine.targets import Target, UserTarget, extract_target
from plusplus.store.base import PointStore

__all__ = ["AccountDirectory", "KarmaReply", "ReplyKind", "process_message"]

logger = logging.getLogger(__name__)


class AccountDirectory(Protocol):
    """Answers whether a platform account id belongs to a bot."""

    async def is_automated(self, user_id: str) -> bool: ...


class ReplyKind(enum.StrEnum):
    """Which family of reply templates to draw from."""
    PLUS = "plus"
    MINUS = "minus"
    EQUALS = "equals"
    SELF = "self"


@dataclass(frozen=True, slots=True)
class KarmaReply:
    """Description of the reply to post; the formatter renders the text."""

    kind: ReplyKind
    target: Target
    points: int = 0


_CHANGE_REPLIES: dict[Operation, ReplyKind] = {
    Operation.INCREMENT: ReplyKind.PLUS,
    Operation.DECREMENT: ReplyKind.MINUS,
}


async def process_message(
    event: MessageEvent,
    store: PointStore,
    accounts: AccountDirectory,
) -> KarmaReply | None:
    """Run one message through the karma pipeline.

    Returns the reply to send, or ``None`` when the message is not a karma
    operation or names no target.
    """
    operation = detect_operation(event.text)
    if operation is Operation.NONE:
        return None
    logger.info("Point operation detected: %s in channel %s", operation.value, event.channel_id)

    target = extract_target(event.text)
    if target is None:
        logger.warning("No target found in message from %s", event.author_id)
        return None

    if operation is Operation.QUERY:
        points = await run_db(store.get_points, target.key)
        return KarmaReply(ReplyKind.EQUALS, target, points)

    if isinstance(target, UserTarget) and target.id == event.author_id:
        logger.info("Rejected self-%s by %s", operation.value, event.author_id)
        return KarmaReply(ReplyKind.SELF, target)

    if isinstance(target, UserTarget):
        is_user = not await accounts.is_automated(target.id)
    else:
        is_user = False

    await run_db(store.add_points, target.key, operation.delta, is_user)
    points = await run_db(store.get_points, target.key)
    logger.info("%s now has %d points", target.key, points)

    return KarmaReply(_CHANGE_REPLIES[operation], target, points)
