"""
Preferences module data models.

A user has at most one preference record. The user-editable settings and
their defaults live on PreferenceSettings; the Stripe columns are cached
subscription state written only by the billing paths.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.tasks.models import TaskStatus
from shared.validation import partial_model


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class Toggle(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class PreferenceSettings(BaseModel):
    """User-editable preferences with their defaults."""

    model_config = ConfigDict(extra="ignore")

    theme: Theme = Field(default=Theme.SYSTEM, description="UI theme")
    language: str = Field(default="en", min_length=2, max_length=10, description="Language code")
    timezone: Optional[str] = Field(default=None, max_length=100, description="IANA timezone")
    default_task_status: TaskStatus = Field(
        default=TaskStatus.TODO,
        description="Status given to new tasks that don't specify one",
    )
    email_notifications: Toggle = Toggle.ENABLED
    task_reminders: Toggle = Toggle.ENABLED
    weekly_digest: Toggle = Toggle.DISABLED
    push_notifications: Toggle = Toggle.DISABLED


class SubscriptionFields(BaseModel):
    """Cached Stripe subscription state on the preference record."""

    plan: str = "free"
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_subscription_status: Optional[str] = None
    stripe_price_id: Optional[str] = None
    stripe_current_period_end: Optional[datetime] = None


class Preferences(PreferenceSettings, SubscriptionFields):
    """A row of the user_preferences table."""

    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime


# No billing columns here; unknown keys are dropped
UpdatePreferencesInput = partial_model(PreferenceSettings, "UpdatePreferencesInput")


def default_preference_values() -> dict:
    """Column values for a freshly created record."""
    return {
        **PreferenceSettings().model_dump(mode="json"),
        "plan": "free",
    }
