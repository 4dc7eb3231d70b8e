"""
Cache-aware task mutations.

Creates and deletes are applied to the cached list before the request goes
out; updates are applied when the server answers. Every mutation ends by
invalidating the tasks entries so a refetch replaces the local guess with
server state. Failures are reported through the Notifier and never rolled
back locally.
"""

import itertools
from typing import Any, Optional

from modules.tasks.models import CreateTaskInput, Task, TaskList, TaskStatus
from modules.tasks.service import summarize_tasks
from shared.repository import utc_now
from shared.validation import validate

from .cache import CacheState, QueryCache
from .http import ApiClient, ApiRequestError
from .notifications import Notifier
from .preferences import PREFERENCES_DETAIL_KEY

TASKS_KEY = ("tasks",)
TASKS_LIST_KEY = ("tasks", "list")

# cancelled tasks only count towards the total
_COUNTER_FIELDS = {
    TaskStatus.COMPLETED: "completed",
    TaskStatus.IN_PROGRESS: "in_progress",
    TaskStatus.TODO: "todo",
}


def adjust_counters(task_list: TaskList, status: TaskStatus, delta: int) -> dict[str, int]:
    """Counter values after adding (delta=1) or removing (delta=-1) one task."""
    counters = {"total": task_list.total + delta}
    field = _COUNTER_FIELDS.get(status)
    if field:
        counters[field] = getattr(task_list, field) + delta
    return counters


class TaskCacheSync:
    """Keeps the cached ``("tasks", "list")`` entry in step with task mutations."""

    def __init__(self, api: ApiClient, cache: QueryCache, notifier: Optional[Notifier] = None):
        self._api = api
        self._cache = cache
        self._notifier = notifier or Notifier()
        self._temp_ids = itertools.count(-1, -1)
        cache.register(TASKS_LIST_KEY, self._fetch_tasks)

    async def _fetch_tasks(self) -> TaskList:
        response = await self._api.get_tasks()
        return TaskList.model_validate(response.data)

    @property
    def state(self) -> CacheState:
        return self._cache.get_state(TASKS_LIST_KEY)

    async def list_tasks(self) -> TaskList:
        return await self._cache.fetch(TASKS_LIST_KEY)

    def _default_status(self) -> TaskStatus:
        prefs = self._cache.get_data(PREFERENCES_DETAIL_KEY)
        if prefs is not None:
            return TaskStatus(prefs.default_task_status)
        return TaskStatus.TODO

    def _placeholder(self, request: CreateTaskInput) -> Task:
        now = utc_now()
        return Task(
            id=next(self._temp_ids),
            user_id="",
            title=request.title,
            description=request.description,
            status=request.status or self._default_status(),
            due_date=request.due_date,
            completed_at=request.completed_at,
            created_at=now,
            updated_at=now,
        )

    async def _reconcile(self) -> None:
        await self._cache.invalidate(TASKS_KEY)

    async def create_task(self, payload: dict[str, Any]) -> Task:
        """
        Prepend a placeholder, create on the server, then reconcile.

        A payload that would not validate gets no placeholder but is still
        sent, so the server's rejection reaches the notifier.
        """
        cached = self._cache.get_data(TASKS_LIST_KEY)
        parsed = validate(CreateTaskInput, payload)
        if cached is not None and parsed.ok:
            placeholder = self._placeholder(parsed.value)
            self._cache.set_data(
                TASKS_LIST_KEY,
                cached.model_copy(update={
                    "tasks": [placeholder, *cached.tasks],
                    **adjust_counters(cached, placeholder.status, 1),
                }),
                optimistic=True,
            )

        try:
            response = await self._api.create_task(payload)
        except ApiRequestError as e:
            self._notifier.error(e, "Failed to create task")
            await self._reconcile()
            raise

        task = Task.model_validate(response.data)
        self._notifier.success("Task created", response.message)
        await self._reconcile()
        return task

    async def update_task(self, task_id: int, payload: dict[str, Any]) -> Task:
        """Update on the server, swap the returned row into the list, then reconcile."""
        try:
            response = await self._api.update_task(task_id, payload)
        except ApiRequestError as e:
            self._notifier.error(e, "Failed to update task")
            await self._reconcile()
            raise

        task = Task.model_validate(response.data)
        cached = self._cache.get_data(TASKS_LIST_KEY)
        if cached is not None:
            tasks = [task if item.id == task.id else item for item in cached.tasks]
            self._cache.set_data(TASKS_LIST_KEY, summarize_tasks(tasks), optimistic=True)

        self._notifier.success("Task updated", response.message)
        await self._reconcile()
        return task

    async def delete_task(self, task_id: int) -> int:
        """Drop the task from the list, delete on the server, then reconcile."""
        cached = self._cache.get_data(TASKS_LIST_KEY)
        if cached is not None:
            removed = next((item for item in cached.tasks if item.id == task_id), None)
            if removed is not None:
                self._cache.set_data(
                    TASKS_LIST_KEY,
                    cached.model_copy(update={
                        "tasks": [item for item in cached.tasks if item.id != task_id],
                        **adjust_counters(cached, removed.status, -1),
                    }),
                    optimistic=True,
                )

        try:
            response = await self._api.delete_task(task_id)
        except ApiRequestError as e:
            self._notifier.error(e, "Failed to delete task")
            await self._reconcile()
            raise

        self._notifier.success("Task deleted", response.message)
        await self._reconcile()
        return response.data["deleted_id"]
