"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic, Any
from supabase import Client


T = TypeVar("T")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_db_value(value: Any) -> Any:
    """Convert a Python value to something PostgREST accepts as JSON."""
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):  # Enum members
        return value.value
    return value


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase-backed repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class TaskRepository(BaseRepository[Task]):
            def get_by_id(self, task_id: int) -> Optional[Task]:
                result = self._db.table("tasks").select("*").eq("id", task_id).execute()
                if not result.data:
                    return None
                return Task(**result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        return self._db.table(self.table_name)

    @staticmethod
    def _serialize(data: dict[str, Any]) -> dict[str, Any]:
        return {key: to_db_value(value) for key, value in data.items()}
