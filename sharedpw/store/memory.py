"""In-process store, for tests and local development."""
import time
import logging
from typing import Optional

from ..exceptions import StoreError
from ..identifiers import mask_id
from ..secret import Secret
from .base import StoreGateway

logger = logging.getLogger("sharedpw.store")


class MemoryStore(StoreGateway):
    """Dict-backed store that drops records once ``expire_at`` has passed."""

    def __init__(self, clock=time.time):
        self._clock = clock
        self._records: dict[str, dict] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _live(self, key: str) -> Optional[dict]:
        record = self._records.get(key)
        if record is not None and record["expireAt"] <= self._clock():
            del self._records[key]
            logger.debug("Memory store: id=%s expired", mask_id(key))
            return None
        return record

    async def put(self, secret: Secret) -> None:
        if self._live(secret.id) is not None:
            raise StoreError(f"id {mask_id(secret.id)} already in use")
        self._records[secret.id] = secret.to_record()

    async def query(self, key: str) -> list[Secret]:
        record = self._live(key)
        return [] if record is None else [Secret.from_record(record)]

    async def delete(self, key: str) -> Optional[Secret]:
        if self._live(key) is None:
            return None
        return Secret.from_record(self._records.pop(key))
