"""Token schema module.

Covers persisted opaque tokens (refresh, reset, verification, revoked) and
the claim set carried by signed access tokens.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from warden.core.datetime_utils import ensure_utc, utc_now


class TokenType(str, Enum):
    """Classes of persisted tokens."""

    REFRESH = "refresh"
    RESET = "reset"
    VERIFICATION = "verification"
    REVOKED = "revoked"


class Token(BaseModel):
    """Persisted opaque token record.

    ``user_id`` is empty for revocation-only (blacklist) entries.
    """

    id: str
    user_id: str = ""
    token_type: TokenType
    token_value: str
    created_at: datetime = Field(default_factory=utc_now)
    expires_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def is_expired(self, now: datetime) -> bool:
        """Whether the token has passed its expiry at ``now``."""
        if self.expires_at is None:
            return False
        return ensure_utc(self.expires_at) <= ensure_utc(now)


class TokenClaims(BaseModel):
    """Access token payload.

    Serialized with the wire names ``userId``, ``username``, ``email``,
    ``roleIds``, ``iat`` and ``exp``. ``issued_at`` and ``expires_at`` are
    unix seconds and are filled in on issuance when unset.
    """

    user_id: str = Field(..., alias="userId")
    username: str = ""
    email: str = ""
    role_ids: List[str] = Field(default_factory=list, alias="roleIds")
    issued_at: Optional[int] = Field(None, alias="iat")
    expires_at: Optional[int] = Field(None, alias="exp")

    model_config = ConfigDict(populate_by_name=True)


class AccessTokenPayload(BaseModel):
    """Strict schema for a decoded access token payload.

    Every claim warden writes is required on the way back in, with exact
    types; anything else makes the token invalid.
    """

    user_id: StrictStr = Field(..., alias="userId", min_length=1)
    username: StrictStr
    email: StrictStr
    role_ids: List[StrictStr] = Field(..., alias="roleIds")
    issued_at: StrictInt = Field(..., alias="iat")
    expires_at: StrictInt = Field(..., alias="exp")

    model_config = ConfigDict(extra="ignore")

    def to_claims(self) -> TokenClaims:
        """Convert to the public claims model."""
        return TokenClaims(
            user_id=self.user_id,
            username=self.username,
            email=self.email,
            role_ids=list(self.role_ids),
            issued_at=self.issued_at,
            expires_at=self.expires_at,
        )


class RefreshRotation(BaseModel):
    """Result of exchanging a refresh token for a new one."""

    user_id: str
    refresh_token: str
