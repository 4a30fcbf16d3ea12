"""
plusplus.errors — Exception hierarchy
======================================

Library exceptions (SQLAlchemy, botocore, slack_sdk) are wrapped into these
at the adapter boundary so the intent handler and the bot only ever catch
PlusPlus types.

A missing target is not an exception: the handler logs it and drops the
message.
"""

from __future__ import annotations


class PlusPlusError(Exception):
    """Base class for every error raised by this package."""


class StoreError(PlusPlusError):
    """The backing point store failed to read or write."""


class AccountLookupError(PlusPlusError):
    """The chat platform could not tell whether an account is automated."""


class TransportError(PlusPlusError):
    """A reply could not be delivered to the chat platform.

    Raised after the point mutation has committed; it is logged, never
    rolled back.
    """
