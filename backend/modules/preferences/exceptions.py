"""
Preferences module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class PreferencesNotFoundError(NotFoundError):
    """Raised when a user has no preference record."""

    def __init__(self, user_id: str):
        super().__init__(
            "User preferences not found",
            code="NO_PREFERENCES",
            details={"user_id": user_id},
        )


class PreferencesAlreadyExistError(ConflictError):
    """
    Raised by repositories when inserting a second record for a user.

    This is the losing side of a concurrent first access; the service
    recovers by re-reading the winning row.
    """

    def __init__(self, user_id: str):
        super().__init__(
            "User preferences already exist",
            code="PREFERENCES_EXIST",
            details={"user_id": user_id},
        )
