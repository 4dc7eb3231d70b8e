"""
Keyed read-through query cache.

Entries are keyed by tuples such as ``("tasks", "list")`` and carry the last
data seen, when it was fetched, and where the entry is in its lifecycle:

    IDLE ──fetch──▶ SETTLED ──optimistic write──▶ OPTIMISTICALLY_MUTATED
                       ▲                                  │
                       └──────── refetch ◀── RECONCILING ◀┘ (invalidate)

The server is the source of truth: optimistic writes are never rolled back,
they are overwritten by the next refetch.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

QueryKey = tuple
Fetcher = Callable[[], Awaitable[Any]]


class CacheState(str, Enum):
    IDLE = "idle"
    OPTIMISTICALLY_MUTATED = "optimistically_mutated"
    RECONCILING = "reconciling"
    SETTLED = "settled"


@dataclass
class CacheEntry:
    data: Any = None
    updated_at: Optional[float] = None
    state: CacheState = CacheState.IDLE
    invalidated: bool = False


def _matches(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


class QueryCache:
    """
    Read-through cache with staleness, prefix invalidation and focus refetch.

    Args:
        stale_time: Seconds after a fetch during which data is served from cache
        clock: Monotonic time source, injectable for tests
    """

    def __init__(self, stale_time: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.stale_time = stale_time
        self._clock = clock
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._fetchers: dict[QueryKey, Fetcher] = {}
        self._in_flight: dict[QueryKey, asyncio.Task] = {}
        # Bumped by every load; only the newest load may write its entry
        self._generations: dict[QueryKey, int] = {}

    def register(self, key: QueryKey, fetcher: Fetcher) -> None:
        """Associate a key with the coroutine function that loads it."""
        self._fetchers[key] = fetcher
        self._entries.setdefault(key, CacheEntry())

    def entry(self, key: QueryKey) -> CacheEntry:
        return self._entries.setdefault(key, CacheEntry())

    def get_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry else None

    def get_state(self, key: QueryKey) -> CacheState:
        entry = self._entries.get(key)
        return entry.state if entry else CacheState.IDLE

    def is_stale(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        if entry is None or entry.updated_at is None or entry.invalidated:
            return True
        return self._clock() - entry.updated_at >= self.stale_time

    def set_data(self, key: QueryKey, value: Any, optimistic: bool = False) -> Any:
        """
        Write an entry directly.

        ``value`` may be a callable taking the current data and returning the
        new data. Optimistic writes leave ``updated_at`` alone so the entry
        still counts as unconfirmed by the server.
        """
        entry = self.entry(key)
        entry.data = value(entry.data) if callable(value) else value
        if optimistic:
            entry.state = CacheState.OPTIMISTICALLY_MUTATED
        else:
            entry.updated_at = self._clock()
            entry.state = CacheState.SETTLED
        return entry.data

    async def fetch(self, key: QueryKey) -> Any:
        """Return cached data when fresh, otherwise load it through the fetcher."""
        if not self.is_stale(key):
            return self._entries[key].data
        return await self.refetch(key)

    async def refetch(self, key: QueryKey, supersede: bool = False) -> Any:
        """
        Load the key from the server.

        A request already in flight is shared, unless ``supersede`` is set:
        then a fresh request starts and the older one no longer writes to
        the cache when it lands.
        """
        if key not in self._fetchers:
            raise KeyError(f"No fetcher registered for {key!r}")

        task = self._in_flight.get(key)
        if task is None or supersede:
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            task = asyncio.ensure_future(self._load(key, generation))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        return await task

    def _forget(self, key: QueryKey, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _load(self, key: QueryKey, generation: int) -> Any:
        entry = self.entry(key)
        if entry.data is not None:
            entry.state = CacheState.RECONCILING
        data = await self._fetchers[key]()
        if self._generations.get(key) != generation:
            return data
        entry.data = data
        entry.updated_at = self._clock()
        entry.invalidated = False
        entry.state = CacheState.SETTLED
        return data

    async def invalidate(self, prefix: QueryKey) -> list[QueryKey]:
        """
        Mark every entry under ``prefix`` stale and refetch the registered ones.

        A failed refetch is logged and the entry stays invalidated, so the
        next ``fetch`` tries again.

        Returns:
            The keys that were invalidated
        """
        keys = [key for key in self._entries if _matches(key, prefix)]
        for key in keys:
            entry = self._entries[key]
            entry.invalidated = True
            if entry.data is not None:
                entry.state = CacheState.RECONCILING

        for key in keys:
            if key in self._fetchers:
                try:
                    await self.refetch(key, supersede=True)
                except Exception as e:
                    logger.warning(f"Refetch of {key!r} failed: {e}")
        return keys

    async def on_window_focus(self) -> list[QueryKey]:
        """Refetch every registered entry that has gone stale."""
        stale = [key for key in self._fetchers if self.is_stale(key)]
        for key in stale:
            try:
                await self.refetch(key)
            except Exception as e:
                logger.warning(f"Refetch of {key!r} on focus failed: {e}")
        return stale
