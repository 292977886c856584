"""Fake organization repository for testing."""

from typing import Optional

from warden.schemas.organization import Organization


class FakeOrganizationRepository:
    """In-memory fake for OrganizationRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: dict[str, Organization] = {}
        self._calls: list[tuple] = []

    def seed(self, organization: Organization) -> None:
        """Populate store with test data."""
        self._store[organization.id] = organization

    async def get(self, organization_id: str) -> Optional[Organization]:
        """Get organization by ID."""
        self._calls.append(("get", organization_id))
        return self._store.get(organization_id)
