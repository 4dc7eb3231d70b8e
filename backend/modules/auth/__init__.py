"""
Authentication module.

Handles token minting/verification, request identity resolution and the
user account lifecycle.

Public API:
- IAuthService, IUserRepository: Interfaces for auth operations and storage
- TokenCodec: Issue and verify credential tokens
- IdentityResolver: Resolve a request to a Principal
- Auth exceptions: UnauthorizedError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import AuthResult, UserRecord, TokenPayload
from .tokens import TokenCodec
from .resolver import IdentityResolver, bearer_token_from_header, token_from_cookie
from .exceptions import (
    UnauthorizedError,
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
    AccountDeletionError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "AuthResult",
    "UserRecord",
    "TokenPayload",
    # Token handling
    "TokenCodec",
    "IdentityResolver",
    "bearer_token_from_header",
    "token_from_cookie",
    # Exceptions
    "UnauthorizedError",
    "InvalidCredentialsError",
    "UserExistsError",
    "UserNotFoundError",
    "AccountDeletionError",
]
