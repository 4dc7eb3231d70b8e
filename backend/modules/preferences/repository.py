"""
Preference repository for database access.

The ``user_preferences.user_id`` unique constraint guarantees at most one
record per user; upserts use it as the conflict target.
"""

import itertools
from typing import Any, Optional

from supabase import PostgrestAPIError

from shared.database import is_unique_violation
from shared.repository import BaseRepository, utc_now

from .exceptions import PreferencesAlreadyExistError
from .models import Preferences, default_preference_values


class PreferenceRepository(BaseRepository[Preferences]):
    """Supabase-backed preference storage."""

    table_name = "user_preferences"

    def get_by_user(self, user_id: str) -> Optional[Preferences]:
        result = self._table().select("*").eq("user_id", user_id).limit(1).execute()
        if not result.data:
            return None
        return Preferences(**result.data[0])

    def get_by_customer(self, customer_id: str) -> Optional[Preferences]:
        result = (
            self._table()
            .select("*")
            .eq("stripe_customer_id", customer_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return Preferences(**result.data[0])

    def create(self, user_id: str, data: dict[str, Any]) -> Preferences:
        row = self._serialize({**data, "user_id": user_id})
        try:
            result = self._table().insert(row).execute()
        except PostgrestAPIError as e:
            if is_unique_violation(e):
                raise PreferencesAlreadyExistError(user_id) from e
            raise
        return Preferences(**result.data[0])

    def upsert(self, user_id: str, data: dict[str, Any]) -> Preferences:
        # INSERT ... ON CONFLICT (user_id) DO UPDATE, only the sent columns
        row = self._serialize({**data, "user_id": user_id, "updated_at": utc_now()})
        result = self._table().upsert(row, on_conflict="user_id").execute()
        return Preferences(**result.data[0])

    def delete_by_user(self, user_id: str) -> bool:
        result = self._table().delete().eq("user_id", user_id).execute()
        return bool(result.data)


class InMemoryPreferenceRepository:
    """Dict-backed preference storage keyed by user_id."""

    def __init__(self) -> None:
        self._rows: dict[str, Preferences] = {}
        self._ids = itertools.count(1)

    def get_by_user(self, user_id: str) -> Optional[Preferences]:
        return self._rows.get(user_id)

    def get_by_customer(self, customer_id: str) -> Optional[Preferences]:
        for prefs in self._rows.values():
            if prefs.stripe_customer_id == customer_id:
                return prefs
        return None

    def create(self, user_id: str, data: dict[str, Any]) -> Preferences:
        if user_id in self._rows:
            raise PreferencesAlreadyExistError(user_id)
        now = utc_now()
        prefs = Preferences(
            **{
                **default_preference_values(),
                **data,
                "id": next(self._ids),
                "user_id": user_id,
                "created_at": now,
                "updated_at": now,
            }
        )
        self._rows[user_id] = prefs
        return prefs

    def upsert(self, user_id: str, data: dict[str, Any]) -> Preferences:
        existing = self._rows.get(user_id)
        if existing is None:
            return self.create(user_id, data)
        updated = Preferences(**{**existing.model_dump(), **data, "updated_at": utc_now()})
        self._rows[user_id] = updated
        return updated

    def delete_by_user(self, user_id: str) -> bool:
        return self._rows.pop(user_id, None) is not None
