"""
Task repository for database access.

Encapsulates all Supabase queries for the ``tasks`` table. Writes are
always filtered by both id and owner, so a row can never change hands.
"""

import itertools
from typing import Any, Optional

from shared.repository import BaseRepository, utc_now

from .models import Task


class TaskRepository(BaseRepository[Task]):
    """
    Repository for task data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying user ownership.
    """

    table_name = "tasks"

    def get_by_id(self, task_id: int) -> Optional[Task]:
        result = self._table().select("*").eq("id", task_id).limit(1).execute()
        if not result.data:
            return None
        return Task(**result.data[0])

    def list_for_user(self, user_id: str) -> list[Task]:
        result = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [Task(**row) for row in result.data]

    def create(self, data: dict[str, Any]) -> Task:
        result = self._table().insert(self._serialize(data)).execute()
        return Task(**result.data[0])

    def update(self, task_id: int, user_id: str, data: dict[str, Any]) -> Optional[Task]:
        row = self._serialize({**data, "updated_at": utc_now()})
        result = (
            self._table()
            .update(row)
            .eq("id", task_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return Task(**result.data[0])

    def delete(self, task_id: int, user_id: str) -> bool:
        result = self._table().delete().eq("id", task_id).eq("user_id", user_id).execute()
        return bool(result.data)

    def delete_by_user(self, user_id: str) -> int:
        result = self._table().delete().eq("user_id", user_id).execute()
        return len(result.data or [])


class InMemoryTaskRepository:
    """Dict-backed task storage with an identity-style id sequence."""

    def __init__(self) -> None:
        self._rows: dict[int, Task] = {}
        self._ids = itertools.count(1)

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self._rows.get(task_id)

    def list_for_user(self, user_id: str) -> list[Task]:
        owned = [task for task in self._rows.values() if task.user_id == user_id]
        # Ties on created_at fall back to the newer id
        return sorted(owned, key=lambda task: (task.created_at, task.id), reverse=True)

    def create(self, data: dict[str, Any]) -> Task:
        now = utc_now()
        task = Task(
            **{
                "created_at": now,
                "updated_at": now,
                **data,
                "id": next(self._ids),
            }
        )
        self._rows[task.id] = task
        return task

    def update(self, task_id: int, user_id: str, data: dict[str, Any]) -> Optional[Task]:
        task = self._rows.get(task_id)
        if task is None or task.user_id != user_id:
            return None
        updated = Task(**{**task.model_dump(), **data, "updated_at": utc_now()})
        self._rows[task_id] = updated
        return updated

    def delete(self, task_id: int, user_id: str) -> bool:
        task = self._rows.get(task_id)
        if task is None or task.user_id != user_id:
            return False
        del self._rows[task_id]
        return True

    def delete_by_user(self, user_id: str) -> int:
        owned = [task_id for task_id, task in self._rows.items() if task.user_id == user_id]
        for task_id in owned:
            del self._rows[task_id]
        return len(owned)
