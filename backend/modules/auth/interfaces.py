"""
Authentication module interface.

Other modules should depend on IAuthService and IUserRepository, not the
concrete implementations. This enables testing with in-memory storage
and mocks.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import Principal

from .models import AuthResult, UserRecord


@runtime_checkable
class IUserRepository(Protocol):
    """Storage contract for the users table."""

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create(self, data: dict[str, Any]) -> UserRecord:
        """
        Insert a user row.

        Raises:
            UserExistsError: If the email is already taken
        """
        ...

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user row. Returns True if a row was removed."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for account operations.

    Token minting lives in the TokenCodec, token resolution in the
    IdentityResolver; this service owns the user lifecycle.
    """

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """
        Create an account and issue a token for it.

        Raises:
            UserExistsError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Verify credentials and issue a token.

        Raises:
            InvalidCredentialsError: If the email/password pair is wrong
        """
        ...

    async def update_profile(self, user_id: str, name: str) -> Principal:
        """
        Update the caller's display name.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def delete_account(self, user_id: str) -> bool:
        """
        Delete the user's tasks, then preferences, then the user row.

        Returns:
            True only if the user row is confirmed removed
        """
        ...
