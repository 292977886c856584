"""Permission service: administration of permission records."""

from typing import Any, Dict, List, Optional

from warden.core.exceptions import InvalidInputError
from warden.core.logging import ContextualLogger
from warden.core.logging import logger as default_logger
from warden.domains.access_control.protocols import PermissionResolverProtocol
from warden.domains.permissions.exceptions import (
    PermissionNotFoundError,
    SystemPermissionModificationError,
)
from warden.domains.permissions.protocols import (
    PermissionRepositoryProtocol,
    PermissionServiceProtocol,
)
from warden.domains.roles.exceptions import RoleNotFoundError
from warden.domains.roles.protocols import RoleRepositoryProtocol
from warden.schemas.permission import Permission, PermissionCreate


class PermissionService(PermissionServiceProtocol):
    """Domain service for permission lifecycle operations."""

    def __init__(
        self,
        permission_repo: PermissionRepositoryProtocol,
        role_repo: RoleRepositoryProtocol,
        resolver: PermissionResolverProtocol,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize with injected dependencies."""
        self._permission_repo = permission_repo
        self._role_repo = role_repo
        self._resolver = resolver
        self._logger = logger or default_logger.with_context(component="permissions")

    async def create_permission(self, permission_in: PermissionCreate) -> Permission:
        """Create a permission. Resource and action keep their case."""
        missing = [f for f in ("name", "resource", "action") if not getattr(permission_in, f)]
        if missing:
            raise InvalidInputError(f"Permission is missing: {', '.join(missing)}")

        permission_data = permission_in.model_dump()
        permission_data["is_system_default"] = False
        permission = await self._permission_repo.create(obj_in=permission_data)
        self._logger.info(
            f"Created permission {permission.name} "
            f"({permission.resource}:{permission.action})",
            extra={"permission_id": permission.id},
        )
        return permission

    async def get_permission(self, permission_id: str) -> Permission:
        """Get a permission by ID."""
        permission = await self._permission_repo.get(permission_id)
        if permission is None:
            raise PermissionNotFoundError(permission_id)
        return permission

    async def list_permissions(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Permission], int]:
        """List permissions with pagination and the total matching count."""
        permissions = await self._permission_repo.get_multi(
            filters=filters, skip=skip, limit=limit
        )
        total = await self._permission_repo.count(filters=filters)
        return permissions, total

    async def delete_permission(self, permission_id: str) -> Permission:
        """Delete a permission.

        Roles still referencing it are left alone; access checks skip the
        dangling reference.
        """
        permission = await self.get_permission(permission_id)
        if permission.is_system_default:
            raise SystemPermissionModificationError(permission_id)
        removed = await self._permission_repo.remove(permission_id)
        if removed is None:
            raise PermissionNotFoundError(permission_id)
        self._logger.info(
            f"Deleted permission {removed.name}", extra={"permission_id": permission_id}
        )
        return removed

    async def get_permissions_by_role(self, role_id: str) -> List[Permission]:
        """Get the permissions attached to a role, in attachment order."""
        role = await self._role_repo.get(role_id)
        if role is None:
            raise RoleNotFoundError(role_id)
        return await self._resolver.permissions_for_role(role)

    async def get_permissions_by_user(self, user_id: str) -> List[Permission]:
        """Get every permission reachable by a user, de-duplicated by ID."""
        return await self._resolver.get_user_permissions(user_id)
