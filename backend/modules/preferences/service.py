"""
Preference service implementation.

Records are created lazily: the first read (or the first task listing)
inserts a record with defaults.
"""

import logging

from .exceptions import PreferencesAlreadyExistError
from .interfaces import IPreferenceRepository, IPreferenceService
from .models import Preferences, UpdatePreferencesInput

logger = logging.getLogger(__name__)


class PreferenceService(IPreferenceService):
    """Read-or-create and partial updates of a user's preference record."""

    def __init__(self, repository: IPreferenceRepository):
        self._repository = repository

    async def get_preferences(self, user_id: str) -> Preferences:
        prefs = self._repository.get_by_user(user_id)
        if prefs is not None:
            return prefs

        try:
            prefs = self._repository.create(user_id, {})
        except PreferencesAlreadyExistError:
            # A concurrent request created it first
            winner = self._repository.get_by_user(user_id)
            if winner is None:
                raise
            logger.info(f"Preferences for user {user_id} created concurrently, using existing")
            return winner

        logger.info(f"Created default preferences for user {user_id}")
        return prefs

    async def update_preferences(self, user_id: str, patch: UpdatePreferencesInput) -> Preferences:
        changes = patch.model_dump(exclude_unset=True, mode="json")
        prefs = self._repository.upsert(user_id, changes)
        logger.info(f"Updated preferences for user {user_id}: {sorted(changes)}")
        return prefs
