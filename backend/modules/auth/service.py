"""
Account service implementation.

Owns the user lifecycle: registration, login, profile updates and
account deletion. Passwords are hashed with bcrypt; tokens are minted
by the injected TokenCodec.
"""

import logging
from typing import TYPE_CHECKING, Optional

import bcrypt

from shared.models import Principal

from .interfaces import IAuthService, IUserRepository
from .models import AuthResult
from .tokens import TokenCodec
from .exceptions import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from modules.preferences.interfaces import IPreferenceRepository
    from modules.tasks.interfaces import ITaskRepository

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt."""
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check a password against a bcrypt hash. A missing hash never matches."""
    if not hashed:
        return False
    secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(secret, hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


class AuthService(IAuthService):
    """
    Implementation of the account service.

    Repositories are injected so the same service runs against Supabase
    or in-memory storage.
    """

    def __init__(
        self,
        users: IUserRepository,
        codec: TokenCodec,
        tasks: "ITaskRepository",
        preferences: "IPreferenceRepository",
        password_rounds: int = 12,
    ):
        self._users = users
        self._codec = codec
        self._tasks = tasks
        self._preferences = preferences
        self._password_rounds = password_rounds

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        if self._users.get_by_email(email) is not None:
            raise UserExistsError(email)

        user = self._users.create(
            {
                "name": name,
                "email": email,
                "password": hash_password(password, self._password_rounds),
            }
        )
        logger.info(f"Registered user {user.id}")

        principal = user.to_principal()
        return AuthResult(user=principal, token=self._codec.issue(principal))

    async def login(self, email: str, password: str) -> AuthResult:
        user = self._users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        principal = user.to_principal()
        return AuthResult(user=principal, token=self._codec.issue(principal))

    async def update_profile(self, user_id: str, name: str) -> Principal:
        user = self._users.update(user_id, {"name": name})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Updated profile for user {user_id}")
        return user.to_principal()

    async def delete_account(self, user_id: str) -> bool:
        """
        Delete everything the user owns, then the user.

        Order matters: tasks, then preferences, then the user row. Any
        failing step aborts the rest and reports False.
        """
        try:
            removed_tasks = self._tasks.delete_by_user(user_id)
            self._preferences.delete_by_user(user_id)
            self._users.delete(user_id)
        except Exception:
            logger.exception(f"Failed to delete account {user_id}")
            return False

        if self._users.get_by_id(user_id) is not None:
            logger.error(f"User {user_id} still present after deletion")
            return False

        logger.info(f"Deleted account {user_id} ({removed_tasks} tasks)")
        return True
