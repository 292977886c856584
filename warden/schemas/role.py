"""Role schema module."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from warden.core.datetime_utils import utc_now


class RoleBase(BaseModel):
    """Base schema for Role.

    An empty ``organization_id`` makes the role system-wide.
    """

    name: str
    description: str = ""
    organization_id: Optional[str] = None
    permission_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class RoleCreate(RoleBase):
    """Schema for creating a Role."""


class RoleUpdate(BaseModel):
    """Schema for updating a Role. Unset fields are left untouched."""

    name: Optional[str] = None
    description: Optional[str] = None
    organization_id: Optional[str] = None
    permission_ids: Optional[List[str]] = None


class Role(RoleBase):
    """Role as stored."""

    id: str
    is_system_default: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_org_scoped(self) -> bool:
        """Whether the role is restricted to a single organization."""
        return bool(self.organization_id)
