"""Fake token repository for testing.

Deliberately does not implement ``consume_token`` so the service's
find-then-delete path is exercised; the in-memory adapter covers the
atomic path.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from warden.core.datetime_utils import ensure_utc
from warden.schemas.token import Token, TokenType


class FakeTokenRepository:
    """In-memory fake for TokenRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: Dict[Tuple[TokenType, str], Token] = {}
        self._failures: Dict[str, Exception] = {}
        self._calls: list[tuple] = []

    def seed(self, *tokens: Token) -> None:
        """Populate store with test data."""
        for token in tokens:
            self._store[(token.token_type, token.token_value)] = token

    def set_expiry(
        self, token_type: TokenType, token_value: str, expires_at: Optional[datetime]
    ) -> None:
        """Overwrite the expiry of a stored token."""
        key = (token_type, token_value)
        self._store[key] = self._store[key].model_copy(update={"expires_at": expires_at})

    def fail_on(self, method: str, error: Exception) -> None:
        """Make every call to ``method`` raise ``error``."""
        self._failures[method] = error

    def tokens(self, token_type: Optional[TokenType] = None) -> List[Token]:
        """Return stored tokens, optionally of one type."""
        return [t for (tt, _), t in self._store.items() if token_type in (None, tt)]

    def call_count(self, method: str) -> int:
        """Return the number of times a method was called."""
        return sum(1 for name, *_ in self._calls if name == method)

    def _record(self, method: str, *args) -> None:
        self._calls.append((method, *args))
        if method in self._failures:
            raise self._failures[method]

    async def store_token(self, token: Token) -> None:
        """Store a token."""
        self._record("store_token", token)
        self._store[(token.token_type, token.token_value)] = token

    async def find_token_by_value(
        self, token_type: TokenType, token_value: str
    ) -> Optional[Token]:
        """Return a stored token."""
        self._record("find_token_by_value", token_type, token_value)
        return self._store.get((token_type, token_value))

    async def find_tokens_by_user(self, token_type: TokenType, user_id: str) -> List[Token]:
        """Return stored tokens of a type owned by a user."""
        self._record("find_tokens_by_user", token_type, user_id)
        return [t for t in self.tokens(token_type) if t.user_id == user_id]

    async def delete_token(self, token_type: TokenType, token_value: str) -> bool:
        """Delete a stored token."""
        self._record("delete_token", token_type, token_value)
        return self._store.pop((token_type, token_value), None) is not None

    async def delete_tokens_by_user(self, token_type: TokenType, user_id: str) -> int:
        """Delete stored tokens of a type owned by a user."""
        self._record("delete_tokens_by_user", token_type, user_id)
        keys = [k for k, t in self._store.items() if k[0] == token_type and t.user_id == user_id]
        for key in keys:
            del self._store[key]
        return len(keys)

    async def delete_expired_tokens(self, now: datetime) -> int:
        """Delete stored tokens expired at ``now``."""
        self._record("delete_expired_tokens", now)
        keys = [
            k
            for k, t in self._store.items()
            if t.expires_at is not None and ensure_utc(t.expires_at) <= ensure_utc(now)
        ]
        for key in keys:
            del self._store[key]
        return len(keys)
