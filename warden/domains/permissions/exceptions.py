"""Permission domain exceptions."""

from warden.core.exceptions import InvalidStateError, NotFoundException


class PermissionNotFoundError(NotFoundException):
    """Raised when a permission is not found."""

    def __init__(self, permission_id: str):
        """Initialize with the missing permission ID."""
        self.permission_id = permission_id
        super().__init__(f"Permission '{permission_id}' not found")


class SystemPermissionModificationError(InvalidStateError):
    """Raised on an attempt to modify or delete a system default permission."""

    def __init__(self, permission_id: str):
        """Initialize with the protected permission ID."""
        self.permission_id = permission_id
        super().__init__(f"System default permission '{permission_id}' cannot be modified")
