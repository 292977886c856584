"""Fake user repository for testing."""

from typing import Optional

from warden.schemas.user import User


class FakeUserRepository:
    """In-memory fake for UserRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: dict[str, User] = {}
        self._calls: list[tuple] = []
        self._error: Optional[Exception] = None

    def seed(self, user: User) -> None:
        """Populate store with test data."""
        self._store[user.id] = user

    def fail_with(self, error: Exception) -> None:
        """Make every subsequent lookup raise ``error``."""
        self._error = error

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    async def get(self, user_id: str) -> Optional[User]:
        """Return seeded user by ID."""
        self._calls.append(("get", user_id))
        if self._error is not None:
            raise self._error
        return self._store.get(user_id)
