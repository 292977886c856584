"""Token domain exceptions.

All of these are authentication failures: the presented credential cannot
be accepted. ``TokenNotFoundError`` is an ``InvalidTokenError`` so that a
consumed one-time token looks the same as one that never existed to any
caller catching ``InvalidTokenError``.
"""

from warden.core.exceptions import AuthenticationError


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed, revoked or fails verification."""

    def __init__(self, message: str = "Invalid token"):
        """Initialize with message."""
        super().__init__(message)


class TokenNotFoundError(InvalidTokenError):
    """Raised when a persisted token does not exist."""

    def __init__(self, message: str = "Token not found"):
        """Initialize with message."""
        super().__init__(message)


class InvalidSignatureError(InvalidTokenError):
    """Raised when an access token signature does not verify."""

    def __init__(self, message: str = "Invalid token signature"):
        """Initialize with message."""
        super().__init__(message)


class ExpiredTokenError(AuthenticationError):
    """Raised when a token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        """Initialize with message."""
        super().__init__(message)
