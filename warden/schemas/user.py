"""User schema module.

Users are owned by the identity subsystem; warden only reads them.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Identity with role and organization references."""

    id: str
    username: str = ""
    email: str = ""
    active: bool = True
    role_ids: List[str] = Field(default_factory=list)
    organization_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
