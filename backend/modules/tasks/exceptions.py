"""
Tasks module exceptions.
"""

from shared.exceptions import (
    OrionError,
    NotFoundError,
    ValidationError,
    AuthorizationError,
)


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, task_id: int):
        super().__init__(
            "Task not found",
            code="TASK_NOT_FOUND",
            details={"task_id": task_id},
        )


class TaskAccessDeniedError(AuthorizationError):
    """Raised when a user acts on a task they don't own."""

    def __init__(self, task_id: int):
        super().__init__(
            "Forbidden",
            code="TASK_ACCESS_DENIED",
            details={"task_id": task_id},
        )


class InvalidTaskIdError(ValidationError):
    """Raised when the task id in the path is not an integer."""

    def __init__(self, raw_id: str):
        super().__init__(
            "Invalid task ID",
            code="INVALID_TASK_ID",
            details={"task_id": raw_id},
        )


class TaskWriteError(OrionError):
    """Raised when the store did not return the written row."""

    def __init__(self, operation: str):
        super().__init__(
            f"Failed to {operation} task",
            code="TASK_WRITE_FAILED",
            details={"operation": operation},
        )
