"""
Orion API client.

An async HTTP client for the Orion API plus a keyed query cache that keeps
local copies of server data in step with mutations.

Public API:
- ApiClient, ApiResponse, ApiRequestError: HTTP access and envelope decoding
- QueryCache, CacheState: Keyed read-through cache
- TaskCacheSync, PreferencesCacheSync: Cache-aware mutations
- Notifier, Notification: User-facing mutation outcomes
"""

from .http import ApiClient, ApiResponse, ApiRequestError
from .cache import QueryCache, CacheEntry, CacheState
from .notifications import Notifier, Notification
from .tasks import TaskCacheSync, TASKS_KEY, TASKS_LIST_KEY
from .preferences import PreferencesCacheSync, PREFERENCES_KEY, PREFERENCES_DETAIL_KEY

__all__ = [
    # HTTP
    "ApiClient",
    "ApiResponse",
    "ApiRequestError",
    # Cache
    "QueryCache",
    "CacheEntry",
    "CacheState",
    # Notifications
    "Notifier",
    "Notification",
    # Synchronizers
    "TaskCacheSync",
    "TASKS_KEY",
    "TASKS_LIST_KEY",
    "PreferencesCacheSync",
    "PREFERENCES_KEY",
    "PREFERENCES_DETAIL_KEY",
]
