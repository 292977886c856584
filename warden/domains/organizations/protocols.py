"""Protocols for the organization domain."""

from typing import Optional, Protocol

from warden.schemas.organization import Organization


class OrganizationRepositoryProtocol(Protocol):
    """Read-only access to organization records."""

    async def get(self, organization_id: str) -> Optional[Organization]:
        """Get an organization by ID, or None if it does not exist."""
        ...
