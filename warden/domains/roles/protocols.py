"""Protocols for the role domain."""

from typing import Any, Dict, List, Optional, Protocol, Sequence

from warden.schemas.role import Role, RoleCreate, RoleUpdate


class RoleRepositoryProtocol(Protocol):
    """Data access for role records."""

    async def get(self, role_id: str) -> Optional[Role]:
        """Get a role by ID, or None if it does not exist."""
        ...

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get a role by its unique name."""
        ...

    async def get_multi(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Role]:
        """List roles whose fields equal every value in ``filters``."""
        ...

    async def count(self, *, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count roles matching ``filters``."""
        ...

    async def create(self, *, obj_in: Dict[str, Any]) -> Role:
        """Create a role. The repository assigns the ID and timestamps."""
        ...

    async def update(self, role_id: str, *, obj_in: Dict[str, Any]) -> Optional[Role]:
        """Apply ``obj_in`` to a role and return it, or None if it does not exist."""
        ...

    async def remove(self, role_id: str) -> Optional[Role]:
        """Delete a role, returning it, or None if it did not exist."""
        ...


class RoleServiceProtocol(Protocol):
    """Service for role administration."""

    async def get_role(self, role_id: str) -> Role:
        """Get a role by ID."""
        ...

    async def list_roles(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Role], int]:
        """List roles with the total matching count."""
        ...

    async def create_role(self, role_in: RoleCreate) -> Role:
        """Create a new, non-default role."""
        ...

    async def update_role(self, role_id: str, role_in: RoleUpdate) -> Role:
        """Update a non-default role."""
        ...

    async def delete_role(self, role_id: str) -> Role:
        """Delete a non-default role."""
        ...

    async def add_permissions_to_role(self, role_id: str, permission_ids: Sequence[str]) -> Role:
        """Attach permissions to a role."""
        ...

    async def remove_permissions_from_role(
        self, role_id: str, permission_ids: Sequence[str]
    ) -> Role:
        """Detach permissions from a role."""
        ...

    async def get_user_roles(self, user_id: str) -> List[Role]:
        """Get the roles assigned to a user."""
        ...

    async def is_user_in_role(self, user_id: str, role_id: str) -> bool:
        """Check whether a user holds a role."""
        ...
