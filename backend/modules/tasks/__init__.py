"""
Tasks module.

User-owned tasks with status tracking. Every read and write is scoped
to the authenticated owner.

Public API:
- ITaskService, ITaskRepository: Interfaces for task operations and storage
- Task, TaskStatus, TaskList: Data models
- CreateTaskInput, UpdateTaskInput: Request schemas
- Task exceptions: TaskNotFoundError, TaskAccessDeniedError, etc.
"""

from .interfaces import ITaskService, ITaskRepository
from .models import (
    Task,
    TaskStatus,
    TaskList,
    TaskDeleted,
    CreateTaskInput,
    UpdateTaskInput,
)
from .exceptions import (
    TaskNotFoundError,
    TaskAccessDeniedError,
    InvalidTaskIdError,
    TaskWriteError,
)

__all__ = [
    # Interfaces
    "ITaskService",
    "ITaskRepository",
    # Models
    "Task",
    "TaskStatus",
    "TaskList",
    "TaskDeleted",
    "CreateTaskInput",
    "UpdateTaskInput",
    # Exceptions
    "TaskNotFoundError",
    "TaskAccessDeniedError",
    "InvalidTaskIdError",
    "TaskWriteError",
]
