"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    OrionError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
)


class UnauthorizedError(AuthenticationError):
    """
    Raised when a request carries no usable credential token.

    The message never says why the token was rejected (missing, expired,
    wrong audience, bad signature all look the same).
    """

    def __init__(self):
        super().__init__("Unauthorized", code="UNAUTHORIZED")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login email/password do not match a user."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class UserExistsError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "User exists",
            code="USER_EXISTS",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user doesn't exist in the database."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class AccountDeletionError(OrionError):
    """Raised when an account could not be fully removed."""

    def __init__(self, user_id: str):
        super().__init__(
            "Failed to delete account",
            code="ACCOUNT_DELETION_FAILED",
            details={"user_id": user_id},
        )
