"""
Auth and account API endpoints.

Login and register return the token in the body and also set it as an
httpOnly cookie, so both browser and API clients can authenticate.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_app_settings, get_auth_service
from api.middleware.auth import get_current_user
from shared.config import Settings
from shared.envelope import SuccessResponse, ok
from shared.models import Principal

from .exceptions import AccountDeletionError
from .interfaces import IAuthService
from .models import (
    AuthResult,
    DeleteAccountResult,
    LoginRequest,
    LogoutResult,
    RegisterRequest,
    UpdateProfileRequest,
)

router = APIRouter()
account_router = APIRouter()


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.auth_token_max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/register", response_model=SuccessResponse[AuthResult])
async def register(
    request: RegisterRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse[AuthResult]:
    """Create an account and sign the caller in."""
    result = await service.register(request.name, request.email, request.password)
    set_auth_cookie(response, result.token, settings)
    return ok(result, "Registration successful")


@router.post("/login", response_model=SuccessResponse[AuthResult])
async def login(
    request: LoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse[AuthResult]:
    """Exchange email and password for a token."""
    result = await service.login(request.email, request.password)
    set_auth_cookie(response, result.token, settings)
    return ok(result, "Login successful")


@router.post("/logout", response_model=SuccessResponse[LogoutResult])
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse[LogoutResult]:
    """Clear the auth cookie. Bearer tokens are simply discarded by the client."""
    clear_auth_cookie(response, settings)
    return ok(LogoutResult(), "Logged out successfully")


@router.get("/me", response_model=SuccessResponse[Principal])
async def me(user: Principal = Depends(get_current_user)) -> SuccessResponse[Principal]:
    return ok(user)


@account_router.put("/profile", response_model=SuccessResponse[Principal])
async def update_profile(
    request: UpdateProfileRequest,
    user: Principal = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse[Principal]:
    updated = await service.update_profile(user.id, request.name)
    return ok(updated, "Profile updated successfully")


@account_router.delete("", response_model=SuccessResponse[DeleteAccountResult])
async def delete_account(
    response: Response,
    user: Principal = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse[DeleteAccountResult]:
    """
    Delete the caller's account with all their tasks and preferences.

    The auth cookie is cleared on success.
    """
    if not await service.delete_account(user.id):
        raise AccountDeletionError(user.id)
    clear_auth_cookie(response, settings)
    return ok(DeleteAccountResult(), "Account deleted successfully")
