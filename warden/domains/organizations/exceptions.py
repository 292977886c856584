"""Organization domain exceptions."""

from warden.core.exceptions import NotFoundException


class OrganizationNotFoundError(NotFoundException):
    """Raised when an organization is not found."""

    def __init__(self, organization_id: str):
        """Initialize with the missing organization ID."""
        self.organization_id = organization_id
        super().__init__(f"Organization '{organization_id}' not found")
