"""Protocols for the user domain.

Users are owned by the identity subsystem; warden only needs to read them.
"""

from typing import Optional, Protocol

from warden.schemas.user import User


class UserRepositoryProtocol(Protocol):
    """Read-only access to user records."""

    async def get(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None if it does not exist."""
        ...
