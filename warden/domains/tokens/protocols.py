"""Protocols for the token domain.

Usage::

    from warden.domains.tokens.protocols import TokenRepositoryProtocol


    async def logout(tokens: TokenServiceProtocol, refresh_token: str) -> None:
        await tokens.revoke_token(refresh_token)
"""

from datetime import datetime
from typing import List, Optional, Protocol, runtime_checkable

from warden.schemas.token import RefreshRotation, Token, TokenClaims, TokenType


class TokenRepositoryProtocol(Protocol):
    """Storage for persisted tokens, keyed by ``(token_type, token_value)``.

    Implementations must be safe for concurrent readers and writers.
    """

    async def store_token(self, token: Token) -> None:
        """Insert or replace a token record."""
        ...

    async def find_token_by_value(
        self, token_type: TokenType, token_value: str
    ) -> Optional[Token]:
        """Get a token by type and value, expired or not."""
        ...

    async def find_tokens_by_user(self, token_type: TokenType, user_id: str) -> List[Token]:
        """Get every token of ``token_type`` owned by ``user_id``."""
        ...

    async def delete_token(self, token_type: TokenType, token_value: str) -> bool:
        """Delete a token. Returns False if it did not exist."""
        ...

    async def delete_tokens_by_user(self, token_type: TokenType, user_id: str) -> int:
        """Delete every token of ``token_type`` owned by ``user_id``."""
        ...

    async def delete_expired_tokens(self, now: datetime) -> int:
        """Delete every token whose expiry is at or before ``now``."""
        ...


@runtime_checkable
class ConsumableTokenRepository(Protocol):
    """Optional capability: atomic find-and-delete of a single token.

    When the token repository provides it, one-time tokens are consumed
    through this method so that concurrent validators cannot both succeed.
    """

    async def consume_token(self, token_type: TokenType, token_value: str) -> Optional[Token]:
        """Delete a token and return it, or None if it did not exist."""
        ...


class TokenServiceProtocol(Protocol):
    """Issues, validates, rotates and revokes security tokens."""

    async def generate_token(self, claims: TokenClaims) -> str:
        """Sign an access token."""
        ...

    async def validate_token(self, token: str) -> TokenClaims:
        """Verify an access token and return its claims."""
        ...

    async def generate_refresh_token(self, user_id: str) -> str:
        """Issue a refresh token."""
        ...

    async def validate_refresh_token(self, token_value: str) -> str:
        """Return the owner of a live refresh token."""
        ...

    async def rotate_refresh_token(self, token_value: str) -> RefreshRotation:
        """Exchange a refresh token for a new one."""
        ...

    async def revoke_token(self, token_value: str) -> None:
        """Blacklist a token value."""
        ...

    async def revoke_all_user_tokens(self, user_id: str) -> None:
        """Blacklist and delete every refresh token of a user."""
        ...

    async def is_revoked(self, token_value: str) -> bool:
        """Whether a token value is blacklisted."""
        ...

    async def generate_password_reset_token(self, user_id: str) -> str:
        """Issue a one-time password reset token."""
        ...

    async def validate_password_reset_token(self, token_value: str) -> str:
        """Consume a password reset token and return its owner."""
        ...

    async def generate_email_verification_token(self, user_id: str) -> str:
        """Issue a one-time email verification token."""
        ...

    async def validate_email_verification_token(self, token_value: str) -> str:
        """Consume an email verification token and return its owner."""
        ...

    async def purge_expired_tokens(self) -> int:
        """Delete every expired persisted token."""
        ...
