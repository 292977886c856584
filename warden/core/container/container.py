"""Dependency Injection Container.

The container is an immutable dataclass holding protocol implementations.
It has no construction logic; that belongs in the factory.
"""

from dataclasses import dataclass, replace
from typing import Any

from warden.domains.access_control.protocols import (
    AccessControlServiceProtocol,
    PermissionResolverProtocol,
    ResourceCatalogProtocol,
)
from warden.domains.organizations.protocols import OrganizationRepositoryProtocol
from warden.domains.permissions.protocols import (
    PermissionRepositoryProtocol,
    PermissionServiceProtocol,
)
from warden.domains.roles.protocols import RoleRepositoryProtocol, RoleServiceProtocol
from warden.domains.tokens.protocols import TokenRepositoryProtocol, TokenServiceProtocol
from warden.domains.users.protocols import UserRepositoryProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # Application: build once from settings
        from warden.core.container import create_container
        container = create_container(settings)
        allowed = await container.access_control.check_access(request)

        # Testing: construct directly with fakes, or swap single fields
        test_container = container.replace(token_repo=FakeTokenRepository())
    """

    # Repositories
    user_repo: UserRepositoryProtocol
    organization_repo: OrganizationRepositoryProtocol
    role_repo: RoleRepositoryProtocol
    permission_repo: PermissionRepositoryProtocol
    token_repo: TokenRepositoryProtocol

    # Wildcard expansion inventory
    resource_catalog: ResourceCatalogProtocol

    # Access control
    permission_resolver: PermissionResolverProtocol
    access_control: AccessControlServiceProtocol

    # Administration
    role_service: RoleServiceProtocol
    permission_service: PermissionServiceProtocol

    # Token lifecycle
    token_service: TokenServiceProtocol

    def replace(self, **changes: Any) -> "Container":
        """Create a new container with some dependencies replaced.

        Services are not rebuilt; replace them explicitly alongside the
        repositories they depend on.

            modified = container.replace(token_service=TokenService(fake_repo, settings))
        """
        return replace(self, **changes)
