"""
plusplus.bot.core — Bolt App & Message Listener
================================================

**Why this file exists:**
This is where Slack meets the karma pipeline.  :class:`PlusPlusBot`:

1. Holds the connected :class:`~plusplus.store.base.PointStore`.
2. Registers a ``message`` listener on a Bolt :class:`AsyncApp`.
3. Runs the Socket Mode connection until cancelled, then closes the store.

Bolt acknowledges each event and runs its listener on its own task, so many
messages can be in flight at once.  Nothing here serializes them; the
store's atomic upsert keeps concurrent ``++`` on the same key consistent.

Listener gates:
- Messages posted by bots (including our own replies) are ignored.
- Edits, deletions and other non-message subtypes are ignored.
"""

from __future__ import annotations

import logging

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp
from slack_sdk.web.async_client import AsyncWebClient

from plusplus import __version__
from plusplus.bot.transport import SlackTransport
from plusplus.engine.events import MessageEvent
from plusplus.errors import TransportError
from plusplus.services.karma_service import KarmaReply, process_message
from plusplus.services.messages import format_reply
from plusplus.store.base import PointStore

logger = logging.getLogger(__name__)

# Message subtypes that carry a fresh, user-authored text.
HANDLED_SUBTYPES: frozenset[str | None] = frozenset({None, "thread_broadcast", "file_share"})


class PlusPlusBot:
    """Slack karma bot.

    Parameters
    ----------
    bot_token:
        ``xoxb-`` token used for Web API calls.
    app_token:
        ``xapp-`` token used to open the Socket Mode connection.
    store:
        A ready :class:`~plusplus.store.base.PointStore`.
    verbose:
        Enable debug output from the Slack SDK.
    """

    def __init__(
        self,
        bot_token: str,
        app_token: str,
        store: PointStore,
        *,
        verbose: bool = False,
    ) -> None:
        if not bot_token or not app_token:
            raise ValueError("SLACK_BOT_TOKEN or SLACK_APP_TOKEN is not set")

        self.store = store
        self.verbose = verbose
        self._app_token = app_token

        sdk_logger = logging.getLogger("plusplus.slack")
        sdk_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        self.app = AsyncApp(token=bot_token, logger=sdk_logger)

        @self.app.event("message")
        async def _message_listener(event: dict, client: AsyncWebClient) -> None:
            await self.on_message(event, client)

    # -----------------------------------------------------------------------
    # Listener
    # -----------------------------------------------------------------------
    async def on_message(self, event: dict, client: AsyncWebClient) -> None:
        """Bolt entry point for every ``message`` event."""
        message = MessageEvent.from_payload(event)
        logger.debug("Received message event: %s", event)
        try:
            await self.handle_message(message, SlackTransport(client))
        except Exception:
            logger.exception(
                "Error processing message from %s in channel %s",
                message.author_id,
                message.channel_id,
            )

    async def handle_message(
        self,
        message: MessageEvent,
        transport: SlackTransport,
    ) -> KarmaReply | None:
        """Gate, process and answer one message.

        Returns the reply that was produced (sent or not), or ``None``.
        Store and account-lookup errors propagate to :meth:`on_message`.
        """
        if message.is_from_bot:
            logger.debug("Ignoring bot message from %s", message.bot_id)
            return None

        if message.subtype not in HANDLED_SUBTYPES:
            logger.debug("Ignoring message subtype %s", message.subtype)
            return None

        reply = await process_message(message, self.store, transport)
        if reply is None:
            return None

        text = format_reply(reply)
        try:
            await transport.send_reply(message.channel_id, message.thread_ts, text)
        except TransportError:
            # The point change has already committed; nothing to undo.
            logger.exception("Error sending reply to channel %s", message.channel_id)
            return reply

        logger.debug("Reply sent: %s", text)
        return reply

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------
    async def start(self) -> None:
        """Connect over Socket Mode and process events until cancelled."""
        logger.info("Starting PlusPlus bot (version %s)…", __version__)
        handler = AsyncSocketModeHandler(self.app, self._app_token)
        try:
            await handler.start_async()
        finally:
            logger.info("Bot shutting down…")
            await handler.close_async()
            self.store.close()
