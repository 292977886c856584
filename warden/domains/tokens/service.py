"""Token service: lifecycle of every security token warden hands out.

Five classes of token:

- access: stateless HS256 JWT, rejected early if its raw string is blacklisted
- refresh: persisted opaque value, rotated on use, revoked into the blacklist
- reset / verification: persisted opaque values with a fixed TTL, deleted on
  first successful validation
- revoked: the blacklist itself

Persisted tokens that have expired are deleted the first time they are
looked up. Secondary cleanup failures are logged and never fail the
primary operation.
"""

import secrets
from datetime import timedelta
from typing import Optional
from uuid import uuid4

import jwt
from pydantic import ValidationError

from warden.core.config import Settings
from warden.core.datetime_utils import to_unix, utc_now
from warden.core.exceptions import InvalidInputError
from warden.core.logging import ContextualLogger, fingerprint
from warden.core.logging import logger as default_logger
from warden.domains.tokens.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    InvalidTokenError,
    TokenNotFoundError,
)
from warden.domains.tokens.protocols import (
    ConsumableTokenRepository,
    TokenRepositoryProtocol,
    TokenServiceProtocol,
)
from warden.schemas.token import (
    AccessTokenPayload,
    RefreshRotation,
    Token,
    TokenClaims,
    TokenType,
)

OPAQUE_TOKEN_BYTES = 32


def new_opaque_token() -> str:
    """Return 32 random bytes, URL-safe base64 encoded."""
    return secrets.token_urlsafe(OPAQUE_TOKEN_BYTES)


class TokenService(TokenServiceProtocol):
    """Issues, validates, rotates and revokes security tokens."""

    def __init__(
        self,
        token_repo: TokenRepositoryProtocol,
        settings: Settings,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with the token store and signing settings."""
        self._token_repo = token_repo
        self._secret = settings.JWT_SECRET
        self._algorithm = settings.JWT_ALGORITHM
        self._access_ttl = settings.access_token_expires
        self._refresh_ttl = settings.refresh_token_expires
        self._reset_ttl = settings.password_reset_token_expires
        self._verification_ttl = settings.email_verification_token_expires
        self._logger = logger or default_logger.with_context(component="tokens")

    # ------------------------------------------------------------------
    # Access tokens (JWT)
    # ------------------------------------------------------------------

    async def generate_token(self, claims: TokenClaims) -> str:
        """Sign an access token for ``claims``.

        ``issued_at`` defaults to now and ``expires_at`` to now plus the
        configured access token lifetime.
        """
        now = utc_now()
        issued_at = claims.issued_at if claims.issued_at is not None else to_unix(now)
        expires_at = (
            claims.expires_at if claims.expires_at is not None else to_unix(now + self._access_ttl)
        )
        payload = {
            "userId": claims.user_id,
            "username": claims.username,
            "email": claims.email,
            "roleIds": list(claims.role_ids),
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    async def validate_token(self, token: str) -> TokenClaims:
        """Verify an access token and return its claims.

        The blacklist is consulted first, so a revoked token is rejected
        even when its signature and expiry are fine.

        Raises:
            InvalidTokenError: Revoked, malformed, or missing a required claim.
            InvalidSignatureError: Signature does not verify.
            ExpiredTokenError: Past its ``exp`` claim.
        """
        if not token:
            raise InvalidTokenError()
        if await self.is_revoked(token):
            raise InvalidTokenError("Token has been revoked")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError() from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        try:
            return AccessTokenPayload.model_validate(payload).to_claims()
        except ValidationError as e:
            raise InvalidTokenError("Token claims are malformed") from e

    # ------------------------------------------------------------------
    # Persisted opaque tokens
    # ------------------------------------------------------------------

    async def _issue(self, token_type: TokenType, user_id: str, ttl: Optional[timedelta]) -> str:
        if not user_id:
            raise InvalidInputError(f"A {token_type.value} token requires a user_id")
        now = utc_now()
        token = Token(
            id=str(uuid4()),
            user_id=user_id,
            token_type=token_type,
            token_value=new_opaque_token(),
            created_at=now,
            expires_at=now + ttl if ttl is not None else None,
        )
        await self._token_repo.store_token(token)
        self._logger.info(
            f"Issued {token_type.value} token",
            extra={"user_id": user_id, "token": fingerprint(token.token_value)},
        )
        return token.token_value

    async def _delete_quietly(self, token_type: TokenType, token_value: str) -> None:
        try:
            await self._token_repo.delete_token(token_type, token_value)
        except Exception as e:
            self._logger.warning(
                f"Failed to delete {token_type.value} token: {e}",
                extra={"token": fingerprint(token_value)},
            )

    def _check_expiry(self, token: Token) -> None:
        if token.is_expired(utc_now()):
            raise ExpiredTokenError()

    async def _lookup(self, token_type: TokenType, token_value: str) -> Token:
        """Find a live token, deleting it if it turns out to be expired."""
        token = await self._token_repo.find_token_by_value(token_type, token_value)
        if token is None:
            raise TokenNotFoundError()
        if token.is_expired(utc_now()):
            await self._delete_quietly(token_type, token_value)
            raise ExpiredTokenError()
        if token_type == TokenType.REFRESH and await self.is_revoked(token_value):
            raise InvalidTokenError("Token has been revoked")
        return token

    async def _take(self, token_type: TokenType, token_value: str) -> Token:
        """Find a live token and remove it, atomically when the store allows."""
        if isinstance(self._token_repo, ConsumableTokenRepository):
            token = await self._token_repo.consume_token(token_type, token_value)
            if token is None:
                raise TokenNotFoundError()
            self._check_expiry(token)
            if token_type == TokenType.REFRESH and await self.is_revoked(token_value):
                raise InvalidTokenError("Token has been revoked")
            return token

        token = await self._lookup(token_type, token_value)
        await self._delete_quietly(token_type, token_value)
        return token

    async def generate_refresh_token(self, user_id: str) -> str:
        """Issue a refresh token for ``user_id``."""
        return await self._issue(TokenType.REFRESH, user_id, self._refresh_ttl)

    async def validate_refresh_token(self, token_value: str) -> str:
        """Return the owner of a live refresh token.

        Raises:
            TokenNotFoundError: Unknown or already rotated/revoked.
            ExpiredTokenError: Past its expiry; the record is deleted.
        """
        token = await self._lookup(TokenType.REFRESH, token_value)
        return token.user_id

    async def rotate_refresh_token(self, token_value: str) -> RefreshRotation:
        """Exchange a refresh token for a new one.

        The old value is removed and blacklisted before the new one is
        issued, so it is unusable as soon as this returns.
        """
        token = await self._take(TokenType.REFRESH, token_value)
        await self.revoke_token(token_value)
        new_value = await self.generate_refresh_token(token.user_id)
        return RefreshRotation(user_id=token.user_id, refresh_token=new_value)

    # ------------------------------------------------------------------
    # Revocation
    # ------------------------------------------------------------------

    async def is_revoked(self, token_value: str) -> bool:
        """Whether ``token_value`` is on the blacklist."""
        entry = await self._token_repo.find_token_by_value(TokenType.REVOKED, token_value)
        return entry is not None

    async def revoke_token(self, token_value: str) -> None:
        """Blacklist ``token_value`` and drop any matching refresh token.

        Idempotent and safe to call for values that were never refresh
        tokens, such as access tokens on logout.
        """
        if not token_value:
            raise InvalidInputError("Cannot revoke an empty token")
        if not await self.is_revoked(token_value):
            await self._token_repo.store_token(
                Token(
                    id=str(uuid4()),
                    token_type=TokenType.REVOKED,
                    token_value=token_value,
                    created_at=utc_now(),
                )
            )
        await self._delete_quietly(TokenType.REFRESH, token_value)
        self._logger.info("Revoked token", extra={"token": fingerprint(token_value)})

    async def revoke_all_user_tokens(self, user_id: str) -> None:
        """Blacklist and delete every refresh token owned by ``user_id``.

        Used when credentials change. A blacklist insert that fails is
        logged; the refresh records are deleted regardless.
        """
        refresh_tokens = await self._token_repo.find_tokens_by_user(TokenType.REFRESH, user_id)
        for token in refresh_tokens:
            try:
                await self._token_repo.store_token(
                    Token(
                        id=str(uuid4()),
                        token_type=TokenType.REVOKED,
                        token_value=token.token_value,
                        created_at=utc_now(),
                    )
                )
            except Exception as e:
                self._logger.warning(
                    f"Failed to blacklist refresh token: {e}",
                    extra={"user_id": user_id, "token": fingerprint(token.token_value)},
                )
        await self._token_repo.delete_tokens_by_user(TokenType.REFRESH, user_id)
        self._logger.info(
            f"Revoked {len(refresh_tokens)} refresh tokens", extra={"user_id": user_id}
        )

    # ------------------------------------------------------------------
    # One-time tokens
    # ------------------------------------------------------------------

    async def generate_password_reset_token(self, user_id: str) -> str:
        """Issue a password reset token, valid for the configured TTL (24h)."""
        return await self._issue(TokenType.RESET, user_id, self._reset_ttl)

    async def validate_password_reset_token(self, token_value: str) -> str:
        """Consume a password reset token and return its owner.

        The token is gone after this call whether or not the caller
        completes the reset.
        """
        token = await self._take(TokenType.RESET, token_value)
        return token.user_id

    async def generate_email_verification_token(self, user_id: str) -> str:
        """Issue an email verification token, valid for the configured TTL (7d)."""
        return await self._issue(TokenType.VERIFICATION, user_id, self._verification_ttl)

    async def validate_email_verification_token(self, token_value: str) -> str:
        """Consume an email verification token and return its owner."""
        token = await self._take(TokenType.VERIFICATION, token_value)
        return token.user_id

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def purge_expired_tokens(self) -> int:
        """Delete every expired persisted token. Returns the number removed."""
        removed = await self._token_repo.delete_expired_tokens(utc_now())
        if removed:
            self._logger.info(f"Purged {removed} expired tokens")
        return removed
