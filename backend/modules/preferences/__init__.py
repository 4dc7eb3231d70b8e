"""
Preferences module.

One record per user holding UI/notification settings plus the cached
Stripe subscription state.
"""

from .interfaces import IPreferenceRepository, IPreferenceService
from .models import (
    Preferences,
    PreferenceSettings,
    SubscriptionFields,
    UpdatePreferencesInput,
    Theme,
    Toggle,
)
from .exceptions import PreferencesNotFoundError, PreferencesAlreadyExistError

__all__ = [
    "IPreferenceRepository",
    "IPreferenceService",
    "Preferences",
    "PreferenceSettings",
    "SubscriptionFields",
    "UpdatePreferencesInput",
    "Theme",
    "Toggle",
    "PreferencesNotFoundError",
    "PreferencesAlreadyExistError",
]
