"""Configuration module for Warden.

Provides centralized configuration management with type-safe enums.

Usage:
    from warden.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from warden.core.config.enums import Environment, LogFormat
from warden.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "LogFormat",
    "settings",
]

# Singleton settings instance
settings = Settings()
