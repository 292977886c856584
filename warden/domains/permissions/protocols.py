"""Protocols for the permission domain."""

from typing import Any, Dict, List, Optional, Protocol, Sequence

from warden.schemas.permission import Permission, PermissionCreate


class PermissionRepositoryProtocol(Protocol):
    """Data access for permission records."""

    async def get(self, permission_id: str) -> Optional[Permission]:
        """Get a permission by ID, or None if it does not exist."""
        ...

    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        """Get every existing permission among ``permission_ids``. Missing IDs are omitted."""
        ...

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Permission]:
        """List permissions whose fields equal every value in ``filters``."""
        ...

    async def count(self, *, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count permissions matching ``filters``."""
        ...

    async def create(self, *, obj_in: Dict[str, Any]) -> Permission:
        """Create a permission. The repository assigns the ID and timestamps."""
        ...

    async def remove(self, permission_id: str) -> Optional[Permission]:
        """Delete a permission, returning it, or None if it did not exist."""
        ...


class PermissionServiceProtocol(Protocol):
    """Service for permission administration."""

    async def create_permission(self, permission_in: PermissionCreate) -> Permission:
        """Create a new, non-default permission."""
        ...

    async def get_permission(self, permission_id: str) -> Permission:
        """Get a permission by ID."""
        ...

    async def list_permissions(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Permission], int]:
        """List permissions with the total matching count."""
        ...

    async def delete_permission(self, permission_id: str) -> Permission:
        """Delete a non-default permission."""
        ...

    async def get_permissions_by_role(self, role_id: str) -> List[Permission]:
        """Get the permissions attached to a role."""
        ...

    async def get_permissions_by_user(self, user_id: str) -> List[Permission]:
        """Get the de-duplicated permissions reachable by a user."""
        ...
