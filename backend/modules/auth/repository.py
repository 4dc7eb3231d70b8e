"""
User repository for database access.

Encapsulates all queries against the ``users`` table. The in-memory
variant backs local development (STORAGE_BACKEND=memory) and tests.
"""

import uuid
from typing import Any, Optional

from supabase import PostgrestAPIError

from shared.database import is_unique_violation
from shared.repository import BaseRepository, utc_now

from .exceptions import UserExistsError
from .models import UserRecord


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    Note: This repository does NOT perform authorization checks.
    Callers pass the id of the already-authenticated user.
    """

    table_name = "users"

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        result = self._table().select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return UserRecord(**result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._table().select("*").eq("email", email.lower()).execute()
        if not result.data:
            return None
        return UserRecord(**result.data[0])

    def create(self, data: dict[str, Any]) -> UserRecord:
        """
        Insert a user row.

        Raises:
            UserExistsError: If the unique email constraint is violated
        """
        row = self._serialize({**data, "email": data["email"].lower()})
        try:
            result = self._table().insert(row).execute()
        except PostgrestAPIError as e:
            if is_unique_violation(e):
                raise UserExistsError(row["email"]) from e
            raise
        return UserRecord(**result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        row = self._serialize({**data, "updated_at": utc_now()})
        result = self._table().update(row).eq("id", user_id).execute()
        if not result.data:
            return None
        return UserRecord(**result.data[0])

    def delete(self, user_id: str) -> bool:
        result = self._table().delete().eq("id", user_id).execute()
        return bool(result.data)


class InMemoryUserRepository:
    """Dict-backed user storage enforcing the unique email constraint."""

    def __init__(self) -> None:
        self._rows: dict[str, UserRecord] = {}

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._rows.get(user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        email = email.lower()
        for user in self._rows.values():
            if user.email == email:
                return user
        return None

    def create(self, data: dict[str, Any]) -> UserRecord:
        email = data["email"].lower()
        if self.get_by_email(email) is not None:
            raise UserExistsError(email)
        now = utc_now()
        user = UserRecord(
            **{
                "id": str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
                **data,
                "email": email,
            }
        )
        self._rows[user.id] = user
        return user

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        user = self._rows.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={**data, "updated_at": utc_now()})
        self._rows[user_id] = updated
        return updated

    def delete(self, user_id: str) -> bool:
        return self._rows.pop(user_id, None) is not None
