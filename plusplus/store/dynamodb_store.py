"""
plusplus.store.dynamodb_store — Managed key-value Point Store
==============================================================

Backs the point counter with a DynamoDB table whose hash key is ``key``.

Writes use a single ``UpdateItem``::

    ADD points :delta SET is_user = :is_user, last_modified = :now

``ADD`` on a number is applied server-side and creates the item (starting
from 0) when it is missing, so two bots incrementing the same key at once
both land.  Reads use ``ConsistentRead`` so a reply never reports a total
older than the write that preceded it.

Local mode points at DynamoDB Local on ``http://localhost:8000`` with dummy
credentials and creates the table on first use.  Remote mode uses the
default AWS credential chain.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from plusplus.errors import StoreError

logger = logging.getLogger(__name__)

LOCAL_ENDPOINT = "http://localhost:8000"
# Provisioned capacity for tables this module creates itself.
READ_CAPACITY = 10
WRITE_CAPACITY = 10

_UPDATE_EXPRESSION = "ADD #points :delta SET #is_user = :is_user, #modified = :now"
_ATTRIBUTE_NAMES = {
    "#points": "points",
    "#is_user": "is_user",
    "#modified": "last_modified",
}


class DynamoDBStore:
    """:class:`~plusplus.store.base.PointStore` over a DynamoDB table resource.

    Parameters
    ----------
    table:
        A ``boto3`` ``dynamodb.Table`` resource (or anything with the same
        ``update_item`` / ``get_item`` methods).
    """

    def __init__(self, table: Any) -> None:
        self._table = table
        self._closed = False

    @classmethod
    def connect(
        cls,
        table_name: str,
        *,
        local: bool = False,
        region: str | None = None,
    ) -> DynamoDBStore:
        """Build a store for *table_name*, creating the table in local mode."""
        try:
            if local:
                logger.info("Using local DynamoDB instance at %s", LOCAL_ENDPOINT)
                resource = boto3.resource(
                    "dynamodb",
                    endpoint_url=LOCAL_ENDPOINT,
                    region_name="dummy",
                    aws_access_key_id="dummy",
                    aws_secret_access_key="dummy",
                    aws_session_token="dummy",
                )
                ensure_table(resource, table_name)
            else:
                logger.info("Using AWS DynamoDB service (region=%s)", region or "default")
                resource = boto3.resource("dynamodb", region_name=region)
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"failed to set up DynamoDB table {table_name!r}: {exc}") from exc

        return cls(resource.Table(table_name))

    def add_points(self, key: str, delta: int, is_user: bool) -> None:
        try:
            self._table.update_item(
                Key={"key": key},
                UpdateExpression=_UPDATE_EXPRESSION,
                ExpressionAttributeNames=_ATTRIBUTE_NAMES,
                ExpressionAttributeValues={
                    ":delta": delta,
                    ":is_user": is_user,
                    ":now": datetime.now(UTC).isoformat(),
                },
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"failed to add {delta} points to {key!r}: {exc}") from exc
        logger.debug("Added %+d points to %s (is_user=%s)", delta, key, is_user)

    def get_points(self, key: str) -> int:
        try:
            response = self._table.get_item(
                Key={"key": key},
                ProjectionExpression="#points",
                ExpressionAttributeNames={"#points": "points"},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreError(f"failed to read points for {key!r}: {exc}") from exc

        item = response.get("Item")
        if not item:
            return 0
        # boto3 hands numbers back as Decimal
        return int(item.get("points", 0))

    def close(self) -> None:
        # boto3 resources hold no connection that needs explicit teardown.
        if not self._closed:
            self._closed = True
            logger.info("DynamoDB point store closed.")


def ensure_table(resource: Any, table_name: str) -> None:
    """Create *table_name* (hash key ``key``) unless it already exists."""
    client = resource.meta.client
    try:
        client.describe_table(TableName=table_name)
        return
    except ClientError as exc:
        if exc.response.get("Error", {}).get("Code") != "ResourceNotFoundException":
            raise

    logger.info("Table '%s' does not exist. Creating...", table_name)
    client.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "key", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "key", "AttributeType": "S"}],
        ProvisionedThroughput={
            "ReadCapacityUnits": READ_CAPACITY,
            "WriteCapacityUnits": WRITE_CAPACITY,
        },
    )
    client.get_waiter("table_exists").wait(TableName=table_name)
    logger.info("Table '%s' created successfully", table_name)
