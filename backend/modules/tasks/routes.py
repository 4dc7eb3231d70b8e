"""
Task API endpoints.

PUT and PATCH are both partial updates: only fields present in the body
change.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_task_service
from api.middleware.auth import get_current_user
from shared.envelope import SuccessResponse, ok
from shared.models import Principal

from .exceptions import InvalidTaskIdError
from .interfaces import ITaskService
from .models import CreateTaskInput, Task, TaskDeleted, TaskList, UpdateTaskInput

router = APIRouter()


def parse_task_id(task_id: str) -> int:
    """Path dependency turning the raw id into an int."""
    try:
        return int(task_id)
    except ValueError:
        raise InvalidTaskIdError(task_id)


@router.get("", response_model=SuccessResponse[TaskList])
async def list_tasks(
    user: Principal = Depends(get_current_user),
    service: ITaskService = Depends(get_task_service),
) -> SuccessResponse[TaskList]:
    """
    List the caller's tasks, newest first, with status counters.
    """
    return ok(await service.list_tasks(user.id))


@router.post("", response_model=SuccessResponse[Task])
async def create_task(
    request: CreateTaskInput,
    user: Principal = Depends(get_current_user),
    service: ITaskService = Depends(get_task_service),
) -> SuccessResponse[Task]:
    task = await service.create_task(user.id, request)
    return ok(task, "Task created successfully")


@router.get("/{task_id}", response_model=SuccessResponse[Task])
async def get_task(
    user: Principal = Depends(get_current_user),
    task_id: int = Depends(parse_task_id),
    service: ITaskService = Depends(get_task_service),
) -> SuccessResponse[Task]:
    return ok(await service.get_task(task_id, user.id))


@router.put("/{task_id}", response_model=SuccessResponse[Task])
@router.patch("/{task_id}", response_model=SuccessResponse[Task])
async def update_task(
    request: UpdateTaskInput,
    user: Principal = Depends(get_current_user),
    task_id: int = Depends(parse_task_id),
    service: ITaskService = Depends(get_task_service),
) -> SuccessResponse[Task]:
    task = await service.update_task(task_id, user.id, request)
    return ok(task, "Task updated successfully")


@router.delete("/{task_id}", response_model=SuccessResponse[TaskDeleted])
async def delete_task(
    user: Principal = Depends(get_current_user),
    task_id: int = Depends(parse_task_id),
    service: ITaskService = Depends(get_task_service),
) -> SuccessResponse[TaskDeleted]:
    deleted_id = await service.delete_task(task_id, user.id)
    return ok(TaskDeleted(deleted_id=deleted_id), "Task deleted successfully")
