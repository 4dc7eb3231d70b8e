"""
Preferences module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Preferences, UpdatePreferencesInput


@runtime_checkable
class IPreferenceRepository(Protocol):
    """Storage contract for the user_preferences table, keyed by user_id."""

    def get_by_user(self, user_id: str) -> Optional[Preferences]:
        ...

    def get_by_customer(self, customer_id: str) -> Optional[Preferences]:
        ...

    def create(self, user_id: str, data: dict[str, Any]) -> Preferences:
        """
        Insert the user's record.

        Raises:
            PreferencesAlreadyExistError: If the user already has one
        """
        ...

    def upsert(self, user_id: str, data: dict[str, Any]) -> Preferences:
        """
        Insert-or-update keyed on user_id.

        A missing record is inserted with ``data`` over the defaults; an
        existing record has only the keys in ``data`` changed.
        """
        ...

    def delete_by_user(self, user_id: str) -> bool:
        ...


@runtime_checkable
class IPreferenceService(Protocol):
    """Interface for preference operations."""

    async def get_preferences(self, user_id: str) -> Preferences:
        """Return the user's record, creating it with defaults if absent."""
        ...

    async def update_preferences(self, user_id: str, patch: UpdatePreferencesInput) -> Preferences:
        """Apply a partial update. Only fields present in the request change."""
        ...
