"""Secret identifiers: generation, validation and log masking."""
import re
import secrets

from .conf import ID_LENGTH
from .exceptions import IdentifierGenerationFailed, InvalidIdentifier

# Rejects ASCII non-word characters, lowercase g-z and every uppercase letter.
_REJECTED_CHARS = re.compile(r"\W|[g-zA-Z]", re.ASCII)


def generate_id() -> str:
    """Return a fresh 16-character lowercase hex identifier.

    Raises:
        IdentifierGenerationFailed: If the OS random source is unavailable.
    """
    try:
        return secrets.token_hex(ID_LENGTH // 2)
    except (OSError, NotImplementedError) as err:
        raise IdentifierGenerationFailed(
            f"Could not generate identifier: {err}"
        ) from err


def validate_id(secret_id: str) -> None:
    """Reject malformed identifiers before they reach the store.

    Raises:
        InvalidIdentifier: If the length is not 16 or a character is rejected.
    """
    if not isinstance(secret_id, str) or len(secret_id) != ID_LENGTH:
        raise InvalidIdentifier("bad id")
    if _REJECTED_CHARS.search(secret_id):
        raise InvalidIdentifier("bad id")


def mask_id(secret_id: str) -> str:
    """Shorten an identifier for log output."""
    return f"{secret_id[:4]}…" if secret_id else "<none>"
