"""
plusplus.bot.transport — Slack Web API capabilities
====================================================

Wraps the two Web API calls the karma pipeline needs:

* ``users.info``        → is this account a bot?
* ``chat.postMessage``  → reply in the channel (or thread) of the message.

``SlackApiError`` never escapes this module; it is re-raised as
:class:`~plusplus.errors.AccountLookupError` or
:class:`~plusplus.errors.TransportError`.
"""

from __future__ import annotations

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from plusplus.errors import AccountLookupError, TransportError

logger = logging.getLogger(__name__)


class SlackTransport:
    """Reply and account-lookup capabilities over an :class:`AsyncWebClient`."""

    def __init__(self, client: AsyncWebClient) -> None:
        self.client = client

    async def is_automated(self, user_id: str) -> bool:
        """Return True when *user_id* belongs to a bot or app user."""
        try:
            response = await self.client.users_info(user=user_id)
        except SlackApiError as exc:
            raise AccountLookupError(f"failed to get user info for {user_id}: {exc}") from exc

        user = response.get("user") or {}
        logger.debug("User info for %s: is_bot=%s", user_id, user.get("is_bot"))
        return bool(user.get("is_bot", False))

    async def send_reply(self, channel_id: str, thread_ts: str | None, text: str) -> None:
        """Post *text* to *channel_id*, inside *thread_ts* when given."""
        kwargs = {"channel": channel_id, "text": text}
        if thread_ts:
            kwargs["thread_ts"] = thread_ts
        try:
            await self.client.chat_postMessage(**kwargs)
        except SlackApiError as exc:
            raise TransportError(f"failed to send message to {channel_id}: {exc}") from exc
