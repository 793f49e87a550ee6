"""
Secret — the persisted record of a one-time secret.

A record is created with a random identifier, given a lifetime of at most
72 hours, and deposited once. The store removes it when ``expire_at``
passes; a successful reveal removes it earlier.

Security Note:
    Never log ``payload``, tags or IVs. Only log masked identifiers.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .conf import (
    CREATE_LIFETIME_HOURS,
    MAX_LIFETIME_HOURS,
    SAVE_LIFETIME_HOURS,
)
from .exceptions import InvalidDuration, StoreError
from .identifiers import generate_id, mask_id

logger = logging.getLogger("sharedpw.secret")

IdGenerator = Callable[[], str]


def expire_after(hours: int) -> int:
    """Unix timestamp ``hours`` from now (UTC)."""
    return int((datetime.now(timezone.utc) + timedelta(hours=hours)).timestamp())


class Secret(BaseModel):
    """One-time secret record.

    Field names are snake_case in Python and camelCase in the store
    (``expireAt``, ``originIp``, ``hasPassword``...). ``id`` is the
    partition key.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    id: str = ""
    expire_at: int = Field(default=0, ge=0)
    lifetime_hours: int = 0
    payload: str = ""
    origin_ip: str = ""
    has_password: bool = False
    hint: str = ""
    tag: str = ""
    iv: str = ""
    pw_tag: str = ""
    pw_iv: str = ""

    @classmethod
    def create(cls, generator: Optional[IdGenerator] = None, **kwargs: Any) -> "Secret":
        """Allocate a new record with a fresh id, expiring in 72 hours.

        Raises:
            IdentifierGenerationFailed: If no identifier could be generated.
        """
        secret = cls(**kwargs)
        secret.new_id(generator)
        secret.expire_at = expire_after(CREATE_LIFETIME_HOURS)
        return secret

    @classmethod
    def from_record(cls, record: dict) -> "Secret":
        """Build a Secret from a store record.

        Raises:
            StoreError: If the stored record does not validate.
        """
        try:
            return cls.model_validate(record)
        except ValidationError as err:
            raise StoreError(f"Malformed secret record: {err}") from err

    def new_id(self, generator: Optional[IdGenerator] = None) -> None:
        """Replace the identifier with a freshly generated one.

        Generator errors propagate unchanged and leave ``id`` untouched.
        """
        self.id = (generator or generate_id)()

    def set_timeout(self, hours: int) -> None:
        """Expire the record ``hours`` from now.

        Args:
            hours: Lifetime in hours, in (0, 72].

        Raises:
            InvalidDuration: If hours is out of range; ``expire_at`` is kept.
        """
        if (
            isinstance(hours, bool)
            or not isinstance(hours, int)
            or not 0 < hours <= MAX_LIFETIME_HOURS
        ):
            raise InvalidDuration(
                f"invalid expiration: {hours!r} (must be in (0, {MAX_LIFETIME_HOURS}] hours)"
            )
        self.lifetime_hours = hours
        self.expire_at = expire_after(hours)

    def to_record(self) -> dict:
        """Return the store representation (camelCase keys)."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        """Render the full record as indented JSON, for debugging."""
        return orjson.dumps(
            self.to_record(),
            option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS,
        ).decode("utf-8")

    async def save(self, store: Any, encoded_payload: str) -> None:
        """Persist the secret with its already-encoded payload.

        A record whose ``expire_at`` was never set gets 24 hours.
        Store errors propagate unchanged; there is no retry.

        Args:
            store: A ``StoreGateway``.
            encoded_payload: base64 encoded encrypted secret.
        """
        if self.expire_at == 0:
            self.expire_at = expire_after(SAVE_LIFETIME_HOURS)
        self.payload = encoded_payload
        try:
            await store.put(self)
        except StoreError as err:
            logger.error("Secret save failed: id=%s: %s", mask_id(self.id), err)
            raise
        logger.debug(
            "Secret saved: id=%s expire_at=%s origin_bound=%s",
            mask_id(self.id), self.expire_at, bool(self.origin_ip),
        )
