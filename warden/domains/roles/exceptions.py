"""Role domain exceptions."""

from typing import Sequence

from warden.core.exceptions import InvalidInputError, InvalidStateError, NotFoundException


class RoleNotFoundError(NotFoundException):
    """Raised when a role is not found."""

    def __init__(self, role_id: str):
        """Initialize with the missing role ID."""
        self.role_id = role_id
        super().__init__(f"Role '{role_id}' not found")


class DuplicateRoleNameError(InvalidStateError):
    """Raised when a role with the same name already exists."""

    def __init__(self, name: str):
        """Initialize with the duplicate name."""
        self.name = name
        super().__init__(f"Role with name '{name}' already exists")


class SystemRoleModificationError(InvalidStateError):
    """Raised on an attempt to modify or delete a system default role."""

    def __init__(self, role_id: str):
        """Initialize with the protected role ID."""
        self.role_id = role_id
        super().__init__(f"System default role '{role_id}' cannot be modified")


class InvalidPermissionsError(InvalidInputError):
    """Raised when one or more referenced permissions do not exist."""

    def __init__(self, missing_ids: Sequence[str]):
        """Initialize with the unknown permission IDs."""
        self.missing_ids = list(missing_ids)
        super().__init__(f"Unknown permission IDs: {', '.join(self.missing_ids)}")
