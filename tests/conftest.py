"""Shared fixtures and store fakes."""
import time
from typing import Optional

import pytest

from sharedpw.exceptions import StoreError
from sharedpw.secret import Secret
from sharedpw.store import MemoryStore

pytest_plugins = ("pytest_asyncio",)


class CountingStore(MemoryStore):
    """MemoryStore that records calls and can be told to fail."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = {"put": 0, "query": 0, "delete": 0}
        self.fail_on: set[str] = set()

    def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.fail_on:
            raise StoreError(f"{operation} unavailable")

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def put(self, secret: Secret) -> None:
        self._enter("put")
        await super().put(secret)

    async def query(self, key: str) -> list[Secret]:
        self._enter("query")
        return await super().query(key)

    async def delete(self, key: str) -> Optional[Secret]:
        self._enter("delete")
        return await super().delete(key)


class FakeRedis:
    """Subset of the asyncio Redis client API used by RedisStore."""

    def __init__(self):
        self.data: dict[str, bytes] = {}
        self.expiry: dict[str, int] = {}
        self.error: Optional[Exception] = None

    def _check(self):
        if self.error is not None:
            raise self.error

    async def set(self, key, value, exat=None, nx=False):
        self._check()
        if nx and key in self.data:
            return None
        self.data[key] = value
        self.expiry[key] = exat
        return True

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def getdel(self, key):
        self._check()
        self.expiry.pop(key, None)
        return self.data.pop(key, None)


@pytest.fixture
def store():
    """Create an empty CountingStore."""
    return CountingStore()


@pytest.fixture
def secret():
    """Create a fresh secret ready to be saved."""
    return Secret.create(hint="the usual", tag="t4g", iv="1v")


@pytest.fixture
def now():
    """Current unix time, in whole seconds."""
    return int(time.time())
