"""
Store gateway contract shared by every backend.

The backing store enforces ``expire_at`` on its own (passive TTL); the
gateways never sweep. Client failures surface as ``StoreError``.
"""
from abc import ABC, abstractmethod
from typing import Optional

from ..secret import Secret


class StoreGateway(ABC):
    """Put/query/delete over secret records keyed by ``id``."""

    @abstractmethod
    async def put(self, secret: Secret) -> None:
        """Write a record. Raises ``StoreError`` if its id is already in use."""

    @abstractmethod
    async def query(self, key: str) -> list[Secret]:
        """Return the records stored under ``key`` (zero or one)."""

    @abstractmethod
    async def delete(self, key: str) -> Optional[Secret]:
        """Atomically delete ``key`` and return the removed record.

        Returns ``None`` when there was nothing to delete.
        """
