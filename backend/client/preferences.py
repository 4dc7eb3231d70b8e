"""
Cache-aware preference updates.
"""

from typing import Any, Optional

from modules.preferences.models import Preferences

from .cache import QueryCache
from .http import ApiClient, ApiRequestError
from .notifications import Notifier

PREFERENCES_KEY = ("preferences",)
PREFERENCES_DETAIL_KEY = ("preferences", "detail")


class PreferencesCacheSync:
    """
    Keeps the cached ``("preferences", "detail")`` entry in step with updates.

    A successful update writes the server's record straight into the cache,
    then invalidates so the next read confirms it.
    """

    def __init__(self, api: ApiClient, cache: QueryCache, notifier: Optional[Notifier] = None):
        self._api = api
        self._cache = cache
        self._notifier = notifier or Notifier()
        cache.register(PREFERENCES_DETAIL_KEY, self._fetch_preferences)

    async def _fetch_preferences(self) -> Preferences:
        response = await self._api.get_preferences()
        return Preferences.model_validate(response.data)

    async def get_preferences(self) -> Preferences:
        return await self._cache.fetch(PREFERENCES_DETAIL_KEY)

    async def update_preferences(self, updates: dict[str, Any]) -> Preferences:
        try:
            response = await self._api.update_preferences(updates)
        except ApiRequestError as e:
            self._notifier.error(e, "Failed to save settings")
            await self._cache.invalidate(PREFERENCES_KEY)
            raise

        preferences = Preferences.model_validate(response.data)
        self._notifier.success("Settings saved", response.message)
        self._cache.set_data(PREFERENCES_DETAIL_KEY, preferences)
        await self._cache.invalidate(PREFERENCES_KEY)
        return preferences
