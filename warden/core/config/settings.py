"""Application settings.

All defaults are defined here. Values are loaded from environment variables
(and an optional ``.env`` file) by Pydantic Settings.
"""

from datetime import timedelta
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from warden.core.config.enums import Environment, LogFormat

_DEFAULT_RESOURCE_CATALOG = ["users", "roles", "permissions", "organizations"]
_DEFAULT_ACTION_CATALOG = ["create", "read", "update", "delete", "list"]


class Settings(BaseSettings):
    """Warden settings.

    Attributes:
        ENVIRONMENT: Deployment environment.
        LOG_LEVEL: Root log level name.
        LOG_FORMAT: ``text`` for local development, ``json`` for log shipping.
        JWT_SECRET: Shared HMAC secret used to sign access tokens.
        JWT_ALGORITHM: Signing algorithm. Only HS256 is supported.
        ACCESS_TOKEN_EXPIRE_MINUTES: Default access token lifetime.
        REFRESH_TOKEN_EXPIRE_DAYS: Optional refresh token lifetime. ``None`` keeps
            refresh tokens valid until they are revoked.
        PASSWORD_RESET_TOKEN_EXPIRE_HOURS: Password reset token lifetime.
        EMAIL_VERIFICATION_TOKEN_EXPIRE_DAYS: Email verification token lifetime.
        RESOURCE_CATALOG: Resources a wildcard resource permission expands to.
        ACTION_CATALOG: Actions a wildcard action permission expands to.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.TEXT

    JWT_SECRET: str = Field(..., min_length=32)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, gt=0)
    REFRESH_TOKEN_EXPIRE_DAYS: Optional[int] = Field(None, gt=0)
    PASSWORD_RESET_TOKEN_EXPIRE_HOURS: int = Field(24, gt=0)
    EMAIL_VERIFICATION_TOKEN_EXPIRE_DAYS: int = Field(7, gt=0)

    RESOURCE_CATALOG: List[str] = Field(default_factory=lambda: list(_DEFAULT_RESOURCE_CATALOG))
    ACTION_CATALOG: List[str] = Field(default_factory=lambda: list(_DEFAULT_ACTION_CATALOG))

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only HMAC-SHA256 signing is supported."""
        if v != "HS256":
            raise ValueError(f"Unsupported JWT algorithm '{v}', expected HS256")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL '{v}'")
        return level

    @property
    def access_token_expires(self) -> timedelta:
        """Default access token lifetime."""
        return timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def refresh_token_expires(self) -> Optional[timedelta]:
        """Refresh token lifetime, or None when refresh tokens never expire."""
        if self.REFRESH_TOKEN_EXPIRE_DAYS is None:
            return None
        return timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)

    @property
    def password_reset_token_expires(self) -> timedelta:
        """Password reset token lifetime."""
        return timedelta(hours=self.PASSWORD_RESET_TOKEN_EXPIRE_HOURS)

    @property
    def email_verification_token_expires(self) -> timedelta:
        """Email verification token lifetime."""
        return timedelta(days=self.EMAIL_VERIFICATION_TOKEN_EXPIRE_DAYS)
