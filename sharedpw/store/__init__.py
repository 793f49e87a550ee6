"""Store gateways and the factory that picks one from configuration."""
from typing import Any, Optional

from ..conf import StoreConfig
from .base import StoreGateway
from .memory import MemoryStore
from .redis_store import RedisStore
from .dynamo import DynamoStore


def open_store(config: Optional[StoreConfig] = None, redis: Any = None) -> StoreGateway:
    """Return the store gateway selected by ``config.backend``.

    Nothing connects here; connection errors surface on first use.

    Raises:
        ValueError: If the redis backend is selected without a client.
    """
    config = config or StoreConfig.from_env()
    if config.backend == "memory":
        return MemoryStore()
    if config.backend == "redis":
        if redis is None:
            raise ValueError("The redis backend needs a Redis client")
        return RedisStore(redis, namespace=config.table)
    return DynamoStore(config=config)


__all__ = [
    "StoreGateway",
    "MemoryStore",
    "RedisStore",
    "DynamoStore",
    "open_store",
]
