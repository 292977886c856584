"""Access control domain exceptions."""

from warden.core.exceptions import PermissionException


class AccessDeniedError(PermissionException):
    """Raised when a principal is authenticated but not authorized."""

    def __init__(self, user_id: str, resource: str, action: str):
        """Initialize with the denied request tuple."""
        self.user_id = user_id
        self.resource = resource
        self.action = action
        super().__init__(f"User '{user_id}' may not '{action}' on '{resource}'")
