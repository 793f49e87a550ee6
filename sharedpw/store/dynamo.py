"""
DynamoDB store.

Table layout: partition key ``id`` (string), TTL attribute ``expireAt``.
DynamoDB removes expired items lazily, so every read and delete also
checks ``expireAt`` against the current time.

boto3 is blocking, so every call runs in a worker thread. A single low-level
client is shared by those threads; it is created on first use, and a bad
region or table name shows up as a ``StoreError`` from that first call.
"""
import time
import asyncio
import logging
import threading
from decimal import Decimal
from typing import Any, Callable, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from ..conf import StoreConfig
from ..exceptions import StoreError
from ..identifiers import mask_id
from ..secret import Secret
from .base import StoreGateway

logger = logging.getLogger("sharedpw.store")

PARTITION_KEY = "id"
EXPIRY_ATTRIBUTE = "expireAt"

_NAMES = {"#id": PARTITION_KEY, "#exp": EXPIRY_ATTRIBUTE}

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_item(record: dict) -> dict:
    return {k: _serializer.serialize(v) for k, v in record.items()}


def _from_item(item: dict) -> Secret:
    """Convert a DynamoDB item (numbers come back as Decimal) to a Secret."""
    record = {}
    for k, v in item.items():
        value = _deserializer.deserialize(v)
        record[k] = int(value) if isinstance(value, Decimal) else value
    return Secret.from_record(record)


def _conditional_failure(err: ClientError) -> bool:
    code = err.response.get("Error", {}).get("Code")
    return code == "ConditionalCheckFailedException"


class DynamoStore(StoreGateway):
    """Secret records in a DynamoDB table."""

    def __init__(
        self,
        client: Any = None,
        config: Optional[StoreConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._config = config or StoreConfig()
        self._client = client
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def table(self) -> str:
        return self._config.table

    def _get_client(self) -> Any:
        with self._lock:
            if self._client is None:
                self._client = boto3.client(
                    "dynamodb", region_name=self._config.region,
                )
            return self._client

    def _now(self) -> dict:
        return _serializer.serialize(int(self._clock()))

    async def _call(self, operation: str, key: str, method: str, **kwargs) -> dict:
        def run() -> dict:
            return getattr(self._get_client(), method)(
                TableName=self.table, **kwargs,
            )
        try:
            return await asyncio.to_thread(run)
        except (BotoCoreError, ClientError) as err:
            if isinstance(err, ClientError) and _conditional_failure(err):
                raise
            logger.error("DynamoDB %s failed: id=%s: %s", operation, mask_id(key), err)
            raise StoreError(f"DynamoDB {operation} failed: {err}") from err

    async def put(self, secret: Secret) -> None:
        try:
            await self._call(
                "put", secret.id, "put_item",
                Item=_to_item(secret.to_record()),
                ConditionExpression="attribute_not_exists(#id) OR #exp <= :now",
                ExpressionAttributeNames=_NAMES,
                ExpressionAttributeValues={":now": self._now()},
            )
        except ClientError as err:
            raise StoreError(f"id {mask_id(secret.id)} already in use") from err

    async def query(self, key: str) -> list[Secret]:
        now = int(self._clock())
        result = await self._call(
            "query", key, "query",
            KeyConditionExpression="#id = :id",
            FilterExpression="#exp > :now",
            ExpressionAttributeNames=_NAMES,
            ExpressionAttributeValues={
                ":id": _serializer.serialize(key),
                ":now": _serializer.serialize(now),
            },
        )
        secrets = [_from_item(item) for item in result.get("Items", [])]
        return [s for s in secrets if s.expire_at > now]

    async def delete(self, key: str) -> Optional[Secret]:
        try:
            result = await self._call(
                "delete", key, "delete_item",
                Key={PARTITION_KEY: _serializer.serialize(key)},
                ConditionExpression="#exp > :now",
                ExpressionAttributeNames={"#exp": EXPIRY_ATTRIBUTE},
                ExpressionAttributeValues={":now": self._now()},
                ReturnValues="ALL_OLD",
            )
        except ClientError:
            # missing or already expired
            return None
        item = result.get("Attributes")
        return None if not item else _from_item(item)
