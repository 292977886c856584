"""Role service: administration of roles and their permission sets."""

from typing import Any, Dict, List, Optional, Sequence

from warden.core.exceptions import InvalidInputError
from warden.core.logging import ContextualLogger
from warden.core.logging import logger as default_logger
from warden.domains.organizations.exceptions import OrganizationNotFoundError
from warden.domains.organizations.protocols import OrganizationRepositoryProtocol
from warden.domains.permissions.protocols import PermissionRepositoryProtocol
from warden.domains.roles.exceptions import (
    DuplicateRoleNameError,
    InvalidPermissionsError,
    RoleNotFoundError,
    SystemRoleModificationError,
)
from warden.domains.roles.protocols import RoleRepositoryProtocol, RoleServiceProtocol
from warden.domains.users.exceptions import UserNotFoundError
from warden.domains.users.protocols import UserRepositoryProtocol
from warden.schemas.role import Role, RoleCreate, RoleUpdate


class RoleService(RoleServiceProtocol):
    """Domain service for role lifecycle operations.

    System default roles are read-only: update, delete and permission
    edits on them raise SystemRoleModificationError.
    """

    def __init__(
        self,
        role_repo: RoleRepositoryProtocol,
        permission_repo: PermissionRepositoryProtocol,
        user_repo: UserRepositoryProtocol,
        organization_repo: Optional[OrganizationRepositoryProtocol] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with injected dependencies.

        Without an organization repository, organization IDs on roles are
        stored as given.
        """
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._user_repo = user_repo
        self._organization_repo = organization_repo
        self._logger = logger or default_logger.with_context(component="roles")

    async def get_role(self, role_id: str) -> Role:
        """Get a role by ID."""
        role = await self._role_repo.get(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        return role

    async def list_roles(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Role], int]:
        """List roles with pagination and the total matching count."""
        roles = await self._role_repo.get_multi(filters=filters, skip=skip, limit=limit)
        total = await self._role_repo.count(filters=filters)
        return roles, total

    async def _get_mutable(self, role_id: str) -> Role:
        role = await self.get_role(role_id)
        if role.is_system_default:
            raise SystemRoleModificationError(role_id)
        return role

    async def _ensure_name_available(self, name: str, role_id: Optional[str] = None) -> None:
        existing = await self._role_repo.get_by_name(name)
        if existing is not None and existing.id != role_id:
            raise DuplicateRoleNameError(name)

    async def _ensure_organization(self, organization_id: Optional[str]) -> None:
        if not organization_id or self._organization_repo is None:
            return
        if await self._organization_repo.get(organization_id) is None:
            raise OrganizationNotFoundError(organization_id)

    async def _ensure_permissions(self, permission_ids: Sequence[str]) -> List[str]:
        """De-duplicate ``permission_ids`` and check that each one exists."""
        unique = list(dict.fromkeys(permission_ids))
        if not unique:
            return unique
        found = {p.id for p in await self._permission_repo.get_by_ids(unique)}
        missing = [pid for pid in unique if pid not in found]
        if missing:
            raise InvalidPermissionsError(missing)
        return unique

    async def create_role(self, role_in: RoleCreate) -> Role:
        """Create a new role. Roles created here are never system defaults."""
        if not role_in.name:
            raise InvalidInputError("Role name is required")
        await self._ensure_name_available(role_in.name)
        await self._ensure_organization(role_in.organization_id)
        permission_ids = await self._ensure_permissions(role_in.permission_ids)

        role_data = role_in.model_dump()
        role_data["permission_ids"] = permission_ids
        role_data["is_system_default"] = False
        role = await self._role_repo.create(obj_in=role_data)
        self._logger.info(f"Created role {role.name}", extra={"role_id": role.id})
        return role

    async def _apply(self, role_id: str, changes: Dict[str, Any]) -> Role:
        role = await self._role_repo.update(role_id, obj_in=changes)
        if role is None:
            raise RoleNotFoundError(role_id)
        return role

    async def update_role(self, role_id: str, role_in: RoleUpdate) -> Role:
        """Update a role. Fields left unset on ``role_in`` are not touched."""
        role = await self._get_mutable(role_id)
        changes = role_in.model_dump(exclude_unset=True)

        if "name" in changes:
            if not changes["name"]:
                raise InvalidInputError("Role name is required")
            if changes["name"] != role.name:
                await self._ensure_name_available(changes["name"], role_id)
        if "organization_id" in changes:
            await self._ensure_organization(changes["organization_id"])
        if changes.get("permission_ids") is not None:
            changes["permission_ids"] = await self._ensure_permissions(changes["permission_ids"])
        elif "permission_ids" in changes:
            changes["permission_ids"] = []

        if not changes:
            return role
        return await self._apply(role_id, changes)

    async def delete_role(self, role_id: str) -> Role:
        """Delete a role and return it."""
        await self._get_mutable(role_id)
        role = await self._role_repo.remove(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        self._logger.info(f"Deleted role {role.name}", extra={"role_id": role_id})
        return role

    async def add_permissions_to_role(self, role_id: str, permission_ids: Sequence[str]) -> Role:
        """Attach permissions, keeping existing ones first. Already attached IDs are ignored."""
        role = await self._get_mutable(role_id)
        added = await self._ensure_permissions(permission_ids)
        merged = list(dict.fromkeys([*role.permission_ids, *added]))
        if merged == role.permission_ids:
            return role
        return await self._apply(role_id, {"permission_ids": merged})

    async def remove_permissions_from_role(
        self, role_id: str, permission_ids: Sequence[str]
    ) -> Role:
        """Detach permissions. IDs not attached to the role are ignored."""
        role = await self._get_mutable(role_id)
        dropped = set(permission_ids)
        remaining = [pid for pid in role.permission_ids if pid not in dropped]
        if remaining == role.permission_ids:
            return role
        return await self._apply(role_id, {"permission_ids": remaining})

    async def get_user_roles(self, user_id: str) -> List[Role]:
        """Get the roles assigned to a user, in assignment order.

        Dangling role references are skipped.
        """
        user = await self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        roles: List[Role] = []
        for role_id in user.role_ids:
            role = await self._role_repo.get(role_id)
            if role is None:
                self._logger.debug(f"User {user_id} references missing role {role_id}")
                continue
            roles.append(role)
        return roles

    async def is_user_in_role(self, user_id: str, role_id: str) -> bool:
        """Whether ``role_id`` is among the user's role IDs."""
        user = await self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return role_id in user.role_ids
