"""Pydantic schemas shared across warden domains."""

from warden.schemas.access import AccessRequest, AccessResponse
from warden.schemas.organization import Organization
from warden.schemas.permission import (
    WILDCARD,
    Permission,
    PermissionBase,
    PermissionCreate,
)
from warden.schemas.role import Role, RoleBase, RoleCreate, RoleUpdate
from warden.schemas.token import (
    AccessTokenPayload,
    RefreshRotation,
    Token,
    TokenClaims,
    TokenType,
)
from warden.schemas.user import User

__all__ = [
    "AccessRequest",
    "AccessResponse",
    "AccessTokenPayload",
    "Organization",
    "Permission",
    "PermissionBase",
    "PermissionCreate",
    "RefreshRotation",
    "Role",
    "RoleBase",
    "RoleCreate",
    "RoleUpdate",
    "Token",
    "TokenClaims",
    "TokenType",
    "User",
    "WILDCARD",
]
