"""
Reveal — existence checks and one-time retrieval of a secret.

``reveal(store, id, ip, consume=False)`` only reports whether the secret is
there. ``consume=True`` decodes the payload, deletes the record and only
then returns it. The delete must report the record it removed: when two
reveals race, only the one whose delete removed the record gets the secret.
"""
import base64
import binascii
import logging
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .exceptions import DecodeError, NotFound
from .identifiers import mask_id, validate_id
from .secret import Secret
from .store import StoreGateway

logger = logging.getLogger("sharedpw.reveal")

Address = Union[str, IPv4Address, IPv6Address, None]


class Revealed(BaseModel):
    """Response of a reveal or existence check.

    ``secret`` is the base64 payload and stays empty unless consumed.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    secret: str = ""
    exists: bool = False
    has_password: bool = False
    hint: str = ""
    tag: str = ""
    iv: str = ""
    pw_tag: str = ""
    pw_iv: str = ""

    def payload(self) -> bytes:
        """Decoded payload bytes (empty for an existence check)."""
        return base64.b64decode(self.secret) if self.secret else b""

    def to_response(self) -> dict:
        """Caller-facing mapping with camelCase keys."""
        return self.model_dump(by_alias=True)


def decode_payload(encoded: str) -> bytes:
    """Decode a stored payload from standard base64.

    Raises:
        DecodeError: If decoding fails or yields nothing.
    """
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as err:
        raise DecodeError(f"could not decode secret: {err}") from err
    if not data:
        raise DecodeError("could not decode secret, got 0 bytes")
    return data


def _requester(ip: Address) -> str:
    return "" if ip is None else str(ip)


def _check_origin(secret: Secret, requester: str) -> None:
    """Origin mismatch is reported exactly like absence."""
    if secret.origin_ip and secret.origin_ip != requester:
        logger.info("Reveal: origin mismatch for id=%s", mask_id(secret.id))
        raise NotFound("not found")


async def reveal(
    store: StoreGateway,
    secret_id: str,
    ip: Address,
    consume: bool = False,
) -> Revealed:
    """Check for, or reveal and destroy, the secret stored under ``secret_id``.

    Args:
        store: Store gateway holding the secrets.
        secret_id: 16-character identifier.
        ip: Requester address, compared to the record's origin address.
        consume: Reveal and delete the secret instead of only checking it.

    Returns:
        A ``Revealed``; with ``consume=False`` it carries only ``exists``.

    Raises:
        InvalidIdentifier: Malformed id, raised before any store access.
        NotFound: No record, origin mismatch, or the record was already taken.
        DecodeError: Stored payload is not valid base64 or is empty.
        StoreError: Any store failure, unchanged.
    """
    validate_id(secret_id)
    requester = _requester(ip)

    records = await store.query(secret_id)
    if not records:
        logger.debug("Reveal: no record for id=%s", mask_id(secret_id))
        raise NotFound("not found")
    secret: Secret = records[0]
    _check_origin(secret, requester)

    if not consume:
        return Revealed(exists=secret.id == secret_id)

    decode_payload(secret.payload)

    removed: Optional[Secret] = await store.delete(secret_id)
    if removed is None:
        # another reveal, or expiry, removed it after our query
        logger.info("Reveal: id=%s was removed concurrently", mask_id(secret_id))
        raise NotFound("not found")
    if removed != secret:
        # the id was reused between query and delete
        logger.info("Reveal: id=%s was replaced concurrently", mask_id(secret_id))
        _check_origin(removed, requester)
        decode_payload(removed.payload)

    logger.debug("Reveal: id=%s revealed and deleted", mask_id(secret_id))
    return Revealed(
        secret=removed.payload,
        exists=True,
        has_password=removed.has_password,
        hint=removed.hint,
        tag=removed.tag,
        iv=removed.iv,
        pw_tag=removed.pw_tag,
        pw_iv=removed.pw_iv,
    )
