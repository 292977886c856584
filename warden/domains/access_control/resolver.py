"""Permission resolver: walks user → roles → permissions.

Role and permission loads are best-effort: a record that is missing or
fails to load is skipped and logged, never fatal. Only the user lookup is
authoritative; its failures propagate.
"""

from typing import Dict, List, Optional

from warden.core.logging import ContextualLogger
from warden.core.logging import logger as default_logger
from warden.domains.access_control.protocols import PermissionResolverProtocol
from warden.domains.permissions.protocols import PermissionRepositoryProtocol
from warden.domains.roles.protocols import RoleRepositoryProtocol
from warden.domains.users.exceptions import UserNotFoundError
from warden.domains.users.protocols import UserRepositoryProtocol
from warden.schemas.permission import Permission
from warden.schemas.role import Role
from warden.schemas.user import User


def role_applies_to_org(role: Role, org_id: Optional[str]) -> bool:
    """Whether ``role`` may be used for a request scoped to ``org_id``.

    System-wide and system-default roles always apply, and so does every
    role when the request carries no organization.
    """
    if not org_id or not role.is_org_scoped or role.is_system_default:
        return True
    return role.organization_id == org_id


class PermissionResolver(PermissionResolverProtocol):
    """Computes the roles and permissions reachable by a user."""

    def __init__(
        self,
        user_repo: UserRepositoryProtocol,
        role_repo: RoleRepositoryProtocol,
        permission_repo: PermissionRepositoryProtocol,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with injected repositories."""
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._logger = logger or default_logger.with_context(component="permission_resolver")

    async def get_user(self, user_id: str) -> User:
        """Load a user, raising UserNotFoundError if it does not exist."""
        user = await self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _load_role(self, role_id: str) -> Optional[Role]:
        try:
            role = await self._role_repo.get(role_id)
        except Exception as e:
            self._logger.warning(f"Skipping role {role_id}: failed to load: {e}")
            return None
        if role is None:
            self._logger.debug(f"Skipping role {role_id}: not found")
        return role

    async def resolve_roles(self, user: User, org_id: Optional[str] = None) -> List[Role]:
        """Load the user's roles that apply within ``org_id``.

        Roles bound to a different organization than the request are
        excluded. Order follows ``user.role_ids``.
        """
        roles: List[Role] = []
        for role_id in user.role_ids:
            role = await self._load_role(role_id)
            if role is None:
                continue
            if not role_applies_to_org(role, org_id):
                self._logger.debug(
                    f"Skipping role {role.name}: scoped to organization "
                    f"{role.organization_id}, request is for {org_id}"
                )
                continue
            roles.append(role)
        return roles

    async def permissions_for_role(self, role: Role) -> List[Permission]:
        """Load the permissions attached to a role, skipping any that fail to load."""
        permissions: List[Permission] = []
        for permission_id in role.permission_ids:
            try:
                permission = await self._permission_repo.get(permission_id)
            except Exception as e:
                self._logger.warning(
                    f"Skipping permission {permission_id} of role {role.name}: "
                    f"failed to load: {e}"
                )
                continue
            if permission is None:
                self._logger.debug(
                    f"Skipping permission {permission_id} of role {role.name}: not found"
                )
                continue
            permissions.append(permission)
        return permissions

    async def get_user_permissions(
        self, user_id: str, org_id: Optional[str] = None
    ) -> List[Permission]:
        """Union of permissions across the user's roles, de-duplicated by ID.

        Args:
            user_id: The user to resolve.
            org_id: Optional organization scope; roles bound to another
                organization are excluded.

        Returns:
            Permissions in first-seen order.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = await self.get_user(user_id)
        roles = await self.resolve_roles(user, org_id)

        by_id: Dict[str, Permission] = {}
        for role in roles:
            for permission in await self.permissions_for_role(role):
                by_id.setdefault(permission.id, permission)
        return list(by_id.values())
