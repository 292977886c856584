"""Permission schema module."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from warden.core.datetime_utils import utc_now

WILDCARD = "*"
"""Matches any value in the resource or action position."""


class PermissionBase(BaseModel):
    """Base schema for Permission.

    ``resource`` and ``action`` are case-sensitive literals or ``WILDCARD``.
    """

    name: str
    description: str = ""
    resource: str
    action: str
    organization_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PermissionCreate(PermissionBase):
    """Schema for creating a Permission. Literal fields must be non-empty."""

    name: str = Field(..., min_length=1)
    resource: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


class Permission(PermissionBase):
    """Permission as stored."""

    id: str
    is_system_default: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
