"""
Tasks module interface.

Routes depend on ITaskService; the service depends on ITaskRepository
so storage can be swapped between Supabase and memory.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import CreateTaskInput, Task, TaskList, UpdateTaskInput


@runtime_checkable
class ITaskRepository(Protocol):
    """Storage contract for the tasks table. Performs no ownership checks."""

    def get_by_id(self, task_id: int) -> Optional[Task]:
        ...

    def list_for_user(self, user_id: str) -> list[Task]:
        """All of a user's tasks, newest first."""
        ...

    def create(self, data: dict[str, Any]) -> Task:
        ...

    def update(self, task_id: int, user_id: str, data: dict[str, Any]) -> Optional[Task]:
        """Update a task row, filtered by id AND owner."""
        ...

    def delete(self, task_id: int, user_id: str) -> bool:
        ...

    def delete_by_user(self, user_id: str) -> int:
        """Delete every task owned by a user. Returns the number removed."""
        ...


@runtime_checkable
class ITaskService(Protocol):
    """
    Interface for task operations.

    Every method takes the authenticated user's id and checks ownership
    against freshly loaded storage state before acting.
    """

    async def list_tasks(self, user_id: str) -> TaskList:
        """
        List the user's tasks with status counters.

        Also makes sure the user's preference record exists.
        """
        ...

    async def get_task(self, task_id: int, user_id: str) -> Task:
        """
        Raises:
            TaskNotFoundError: If the task doesn't exist
            TaskAccessDeniedError: If the task belongs to someone else
        """
        ...

    async def create_task(self, user_id: str, request: CreateTaskInput) -> Task:
        ...

    async def update_task(self, task_id: int, user_id: str, patch: UpdateTaskInput) -> Task:
        """
        Apply a partial update. Only fields present in the request change.

        Raises:
            TaskNotFoundError: If the task doesn't exist
            TaskAccessDeniedError: If the task belongs to someone else
        """
        ...

    async def delete_task(self, task_id: int, user_id: str) -> int:
        """
        Hard-delete a task and return its id.

        Raises:
            TaskNotFoundError: If the task doesn't exist
            TaskAccessDeniedError: If the task belongs to someone else
        """
        ...
