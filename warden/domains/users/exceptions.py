"""User domain exceptions."""

from warden.core.exceptions import NotFoundException


class UserNotFoundError(NotFoundException):
    """Raised when a user is not found."""

    def __init__(self, user_id: str):
        """Initialize with the missing user ID."""
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")
