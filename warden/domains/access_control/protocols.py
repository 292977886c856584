"""Protocols for the access control domain."""

from typing import List, Optional, Protocol

from warden.schemas.access import AccessRequest, AccessResponse
from warden.schemas.permission import Permission
from warden.schemas.role import Role
from warden.schemas.user import User


class ResourceCatalogProtocol(Protocol):
    """Inventory of known resources and actions, used to expand wildcards."""

    async def list_resources(self) -> List[str]:
        """Return every known resource name."""
        ...

    async def list_actions(self, resource: str) -> List[str]:
        """Return every known action for ``resource``."""
        ...


class PermissionResolverProtocol(Protocol):
    """Computes the roles and permissions reachable by a user."""

    async def get_user(self, user_id: str) -> User:
        """Load a user, raising if it does not exist."""
        ...

    async def resolve_roles(self, user: User, org_id: Optional[str] = None) -> List[Role]:
        """Load the user's roles that apply within ``org_id``."""
        ...

    async def permissions_for_role(self, role: Role) -> List[Permission]:
        """Load the permissions attached to a role."""
        ...

    async def get_user_permissions(
        self, user_id: str, org_id: Optional[str] = None
    ) -> List[Permission]:
        """Union of permissions across the user's roles, de-duplicated by ID."""
        ...


class AccessControlServiceProtocol(Protocol):
    """Answers access-check queries."""

    async def check_access(self, request: AccessRequest) -> bool:
        """Whether the request is granted."""
        ...

    async def check_access_detailed(self, request: AccessRequest) -> AccessResponse:
        """Evaluate the request and explain the outcome."""
        ...

    async def require_access(self, request: AccessRequest) -> AccessResponse:
        """Evaluate the request, raising if it is denied."""
        ...

    async def get_user_permissions(self, user_id: str) -> List[Permission]:
        """All permissions reachable by the user."""
        ...

    async def get_user_resources(self, user_id: str) -> List[str]:
        """Resources the user holds any permission on."""
        ...

    async def get_user_actions(self, user_id: str, resource: str) -> List[str]:
        """Actions the user may perform on ``resource``."""
        ...

    async def has_permission(self, user_id: str, resource: str, action: str) -> bool:
        """Unscoped access check."""
        ...
