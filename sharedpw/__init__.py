"""SharedPW — One-time secret storage.

A caller deposits an already-encrypted payload under a random identifier;
the first reveal returns it and destroys it, or the store expires it.

Security Note (Threat Model):
    The store only ever holds ciphertext; encryption and decryption are
    done by the caller. Origin binding compares requester addresses as
    plain strings and is not an authentication mechanism.
"""

from .version import __version__
from .conf import StoreConfig
from .exceptions import (
    SharedPwError,
    InvalidDuration,
    IdentifierGenerationFailed,
    InvalidIdentifier,
    NotFound,
    DecodeError,
    StoreError,
)
from .identifiers import generate_id, validate_id
from .secret import Secret
from .reveal import Revealed, reveal
from .store import StoreGateway, MemoryStore, RedisStore, DynamoStore, open_store

__all__ = [
    "__version__",
    "StoreConfig",
    "SharedPwError",
    "InvalidDuration",
    "IdentifierGenerationFailed",
    "InvalidIdentifier",
    "NotFound",
    "DecodeError",
    "StoreError",
    "generate_id",
    "validate_id",
    "Secret",
    "Revealed",
    "reveal",
    "StoreGateway",
    "MemoryStore",
    "RedisStore",
    "DynamoStore",
    "open_store",
]
