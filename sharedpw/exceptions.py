"""SharedPW exceptions.

``NotFound`` is raised for a missing record, an origin mismatch and a lost
reveal race alike. Callers must not be able to tell those cases apart.
"""


class SharedPwError(Exception):
    """Base class for all SharedPW errors."""


class InvalidDuration(SharedPwError, ValueError):
    """Lifetime outside of (0, 72] hours."""


class IdentifierGenerationFailed(SharedPwError):
    """The identifier generator could not produce a token."""


class InvalidIdentifier(SharedPwError, ValueError):
    """Malformed lookup key (wrong length or disallowed characters)."""


class NotFound(SharedPwError):
    """No secret is available for this identifier and requester."""


class DecodeError(SharedPwError):
    """Stored payload cannot be decoded, or decodes to nothing."""


class StoreError(SharedPwError):
    """Failure reported by the backing store.

    The client exception is chained as ``__cause__``.
    """
