"""Container Factory.

All construction logic lives here: one fresh set of in-memory repositories
per container, shared by every service built on top of them.
"""

from warden.adapters.repositories import (
    InMemoryOrganizationRepository,
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    InMemoryTokenRepository,
    InMemoryUserRepository,
)
from warden.core.config import Settings
from warden.core.container.container import Container
from warden.core.logging import logger
from warden.domains.access_control.catalog import StaticResourceCatalog
from warden.domains.access_control.resolver import PermissionResolver
from warden.domains.access_control.service import AccessControlService
from warden.domains.permissions.service import PermissionService
from warden.domains.roles.service import RoleService
from warden.domains.tokens.service import TokenService


def create_container(settings: Settings) -> Container:
    """Build a fully wired container.

    Args:
        settings: Application settings (from core/config)

    Returns:
        Container ready for use
    """
    user_repo = InMemoryUserRepository()
    organization_repo = InMemoryOrganizationRepository()
    role_repo = InMemoryRoleRepository()
    permission_repo = InMemoryPermissionRepository()
    token_repo = InMemoryTokenRepository()

    catalog = StaticResourceCatalog.from_settings(settings)
    resolver = PermissionResolver(user_repo, role_repo, permission_repo)

    container = Container(
        user_repo=user_repo,
        organization_repo=organization_repo,
        role_repo=role_repo,
        permission_repo=permission_repo,
        token_repo=token_repo,
        resource_catalog=catalog,
        permission_resolver=resolver,
        access_control=AccessControlService(resolver, catalog),
        role_service=RoleService(role_repo, permission_repo, user_repo, organization_repo),
        permission_service=PermissionService(permission_repo, role_repo, resolver),
        token_service=TokenService(token_repo, settings),
    )
    logger.debug(f"Container built for environment={settings.ENVIRONMENT.value}")
    return container
