"""
Tasks module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.validation import partial_model


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Task(BaseModel):
    """A row of the tasks table."""

    id: int = Field(..., description="Task ID")
    user_id: str = Field(..., description="Owner's user ID")
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CreateTaskInput(BaseModel):
    """
    Request body for creating a task.

    Unknown fields (including ``user_id``) are ignored; the owner always
    comes from the authenticated principal.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: Optional[str] = Field(None, max_length=1000, description="Task description")
    # Omitted means the owner's default_task_status preference. Not Optional:
    # partial_model keys off the annotation to reject an explicit null status.
    status: TaskStatus = Field(None, description="Task status")  # type: ignore[assignment]
    due_date: Optional[datetime] = Field(None, description="Due date")
    completed_at: Optional[datetime] = Field(None, description="Completion time")


# Every field optional, constraints kept; {} is a valid no-op patch
UpdateTaskInput = partial_model(CreateTaskInput, "UpdateTaskInput")


class TaskList(BaseModel):
    """The owner's tasks, newest first, with per-status counters."""

    tasks: list[Task]
    total: int
    completed: int
    in_progress: int
    todo: int


class TaskDeleted(BaseModel):
    deleted_id: int
