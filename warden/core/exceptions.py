"""Base exception hierarchy for Warden.

Domain packages subclass these in their own ``exceptions.py``. Transport
layers map the bases onto status codes:

- ``NotFoundException``: the referenced record does not exist
- ``InvalidInputError``: the caller supplied missing or malformed input
- ``InvalidStateError``: the operation is not allowed for the record's state
- ``AuthenticationError``: the presented credential is invalid, expired or revoked
- ``PermissionException``: the credential is valid but lacks the privilege
"""

from typing import Optional


class WardenException(Exception):
    """Base exception for all Warden errors."""

    def __init__(self, message: Optional[str] = None):
        """Initialize with an optional message."""
        self.message = message or self.__class__.__doc__ or "Warden error"
        super().__init__(self.message)


class NotFoundException(WardenException):
    """Raised when a requested record does not exist."""


class InvalidInputError(WardenException):
    """Raised when required input is missing or malformed."""


class InvalidStateError(WardenException):
    """Raised when an operation conflicts with the current state of a record."""


class AuthenticationError(WardenException):
    """Raised when a credential cannot be accepted."""


class PermissionException(WardenException):
    """Raised when an authenticated principal lacks the required permission."""
