"""Repository adapters."""

from warden.adapters.repositories.in_memory import (
    InMemoryOrganizationRepository,
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    InMemoryTokenRepository,
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryOrganizationRepository",
    "InMemoryPermissionRepository",
    "InMemoryRoleRepository",
    "InMemoryTokenRepository",
    "InMemoryUserRepository",
]
