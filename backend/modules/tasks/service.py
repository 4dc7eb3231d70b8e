"""
Task service implementation.

Every operation on an existing task loads it fresh from storage and runs
the ownership check before touching it. ``completed_at`` is kept in step
with ``status`` unless the caller sets it explicitly.
"""

import logging
from typing import Any, Iterable

from modules.preferences.interfaces import IPreferenceService
from shared.authorization import ResourceAuthorizer
from shared.repository import utc_now

from .interfaces import ITaskRepository, ITaskService
from .models import CreateTaskInput, Task, TaskList, TaskStatus, UpdateTaskInput
from .exceptions import TaskAccessDeniedError, TaskNotFoundError, TaskWriteError

logger = logging.getLogger(__name__)


def summarize_tasks(tasks: Iterable[Task]) -> TaskList:
    """Build a TaskList, counting statuses in a single pass."""
    items = list(tasks)
    counts = {status: 0 for status in TaskStatus}
    for task in items:
        counts[task.status] += 1
    return TaskList(
        tasks=items,
        total=len(items),
        completed=counts[TaskStatus.COMPLETED],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        todo=counts[TaskStatus.TODO],
    )


def _stamp_completion(changes: dict[str, Any], previous: Any = None) -> None:
    """Set or clear completed_at when the status crosses 'completed'."""
    if "status" not in changes or "completed_at" in changes:
        return
    status = changes["status"]
    if status == TaskStatus.COMPLETED and previous != TaskStatus.COMPLETED:
        changes["completed_at"] = utc_now()
    elif status != TaskStatus.COMPLETED and previous == TaskStatus.COMPLETED:
        changes["completed_at"] = None


class TaskService(ITaskService):
    """
    Task service backed by an ITaskRepository.

    Default status for new tasks comes from the owner's preferences.
    """

    def __init__(self, repository: ITaskRepository, preferences: IPreferenceService):
        self._repository = repository
        self._preferences = preferences
        self._authorizer = ResourceAuthorizer(TaskNotFoundError, TaskAccessDeniedError)

    def _load_owned(self, task_id: int, user_id: str) -> Task:
        task = self._repository.get_by_id(task_id)
        return self._authorizer.ensure_allowed(user_id, task, task_id)

    async def list_tasks(self, user_id: str) -> TaskList:
        await self._preferences.get_preferences(user_id)
        result = summarize_tasks(self._repository.list_for_user(user_id))
        logger.info(f"Fetched {result.total} tasks for user {user_id}")
        return result

    async def get_task(self, task_id: int, user_id: str) -> Task:
        return self._load_owned(task_id, user_id)

    async def create_task(self, user_id: str, request: CreateTaskInput) -> Task:
        data = request.model_dump(exclude_none=True)
        if request.status is None:
            prefs = await self._preferences.get_preferences(user_id)
            data["status"] = prefs.default_task_status
        _stamp_completion(data)
        data["user_id"] = user_id

        task = self._repository.create(data)
        logger.info(f"Task {task.id} created for user {user_id}")
        return task

    async def update_task(self, task_id: int, user_id: str, patch: UpdateTaskInput) -> Task:
        existing = self._load_owned(task_id, user_id)

        changes = patch.model_dump(exclude_unset=True)
        _stamp_completion(changes, previous=existing.status)

        task = self._repository.update(task_id, user_id, changes)
        if task is None:
            raise TaskWriteError("update")
        logger.info(f"Task {task_id} updated by user {user_id}: {sorted(changes)}")
        return task

    async def delete_task(self, task_id: int, user_id: str) -> int:
        self._load_owned(task_id, user_id)

        if not self._repository.delete(task_id, user_id):
            raise TaskNotFoundError(task_id)
        logger.info(f"Task {task_id} deleted by user {user_id}")
        return task_id
