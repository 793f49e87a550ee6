"""
Redis store.

Wraps an asyncio Redis client (``redis.asyncio.Redis`` or compatible).
Records are orjson documents under ``<namespace>:<id>``; Redis expires
them at ``expire_at`` and ``GETDEL`` gives the atomic delete.
"""
import logging
from typing import Any, Optional

import orjson

from ..exceptions import StoreError
from ..identifiers import mask_id
from ..secret import Secret
from .base import StoreGateway

logger = logging.getLogger("sharedpw.store")


class RedisStore(StoreGateway):
    """Secret records in Redis, one key per secret."""

    def __init__(self, redis: Any, namespace: str = "sharedpw"):
        self._redis = redis
        self._namespace = namespace

    def _redis_key(self, key: str) -> str:
        """Build Redis key."""
        return f"{self._namespace}:{key}"

    def _load(self, raw: Optional[bytes]) -> Optional[Secret]:
        if raw is None:
            return None
        try:
            record = orjson.loads(raw)
        except orjson.JSONDecodeError as err:
            raise StoreError(f"Malformed secret record: {err}") from err
        return Secret.from_record(record)

    async def put(self, secret: Secret) -> None:
        try:
            stored = await self._redis.set(
                self._redis_key(secret.id),
                orjson.dumps(secret.to_record()),
                exat=secret.expire_at,
                nx=True,
            )
        except Exception as err:
            logger.error("Redis put failed: id=%s: %s", mask_id(secret.id), err)
            raise StoreError(f"Redis put failed: {err}") from err
        if not stored:
            raise StoreError(f"id {mask_id(secret.id)} already in use")

    async def query(self, key: str) -> list[Secret]:
        try:
            raw = await self._redis.get(self._redis_key(key))
        except Exception as err:
            logger.error("Redis get failed: id=%s: %s", mask_id(key), err)
            raise StoreError(f"Redis get failed: {err}") from err
        secret = self._load(raw)
        return [] if secret is None else [secret]

    async def delete(self, key: str) -> Optional[Secret]:
        try:
            raw = await self._redis.getdel(self._redis_key(key))
        except Exception as err:
            logger.error("Redis delete failed: id=%s: %s", mask_id(key), err)
            raise StoreError(f"Redis delete failed: {err}") from err
        return self._load(raw)
