"""
Authentication dependencies.

Resolve the caller from the bearer header or the auth cookie. Every
rejection reason (no token, bad signature, expired, deleted account)
surfaces as the same 401 "Unauthorized".
"""

from typing import Optional

from fastapi import Depends, Request

from modules.auth.exceptions import UnauthorizedError
from modules.auth.resolver import IdentityResolver
from shared.models import Principal

from ..dependencies import get_identity_resolver


async def get_current_user(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Principal:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Principal = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    user = await resolver.resolve(request)
    if user is None:
        raise UnauthorizedError()
    return user


async def get_optional_user(
    request: Request,
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[Principal]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    return await resolver.resolve(request)
