"""Organization schema module."""

from pydantic import BaseModel, ConfigDict


class Organization(BaseModel):
    """Tenant that org-scoped roles and permissions belong to."""

    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)
