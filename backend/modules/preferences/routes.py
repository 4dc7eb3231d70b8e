"""
Preferences API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_preference_service
from api.middleware.auth import get_current_user
from shared.envelope import SuccessResponse, ok
from shared.models import Principal

from .interfaces import IPreferenceService
from .models import Preferences, UpdatePreferencesInput

router = APIRouter()


@router.get("", response_model=SuccessResponse[Preferences])
async def get_preferences(
    user: Principal = Depends(get_current_user),
    service: IPreferenceService = Depends(get_preference_service),
) -> SuccessResponse[Preferences]:
    """Get the caller's preferences, creating them with defaults on first access."""
    return ok(await service.get_preferences(user.id))


@router.put("", response_model=SuccessResponse[Preferences])
async def update_preferences(
    request: UpdatePreferencesInput,
    user: Principal = Depends(get_current_user),
    service: IPreferenceService = Depends(get_preference_service),
) -> SuccessResponse[Preferences]:
    """
    Update some of the caller's preferences.

    Only fields present in the body change. Subscription fields cannot
    be set here.
    """
    prefs = await service.update_preferences(user.id, request)
    return ok(prefs, "Preferences updated successfully")
