# src/api_practice/core/errors.py

"""
Errors visible to callers of the task use cases.

The HTTP layer maps these to status codes; everything else treats them as
ordinary exceptions chained to their cause.
"""

from __future__ import annotations


class TaskServiceError(Exception):
    """Base class for all task service failures."""

    @property
    def message(self) -> str:
        return str(self)


class TaskNotFound(TaskServiceError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: id={task_id}")
        self.task_id = task_id


class UserNotFound(TaskServiceError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: userId={user_id}")
        self.user_id = user_id


class AlreadyCompleted(TaskServiceError):
    def __init__(self, task_id: int | None = None) -> None:
        if task_id is None:
            super().__init__("Task is already completed")
        else:
            super().__init__(f"Task is already completed: id={task_id}")
        self.task_id = task_id


class UserValidationUnavailable(TaskServiceError):
    """The remote user service could not confirm presence or absence."""

    def __init__(self, user_id: str, cause: BaseException | str | None = None) -> None:
        detail = f" ({cause})" if cause else ""
        super().__init__(f"Failed to validate user: {user_id}{detail}")
        self.user_id = user_id
        self.cause = cause


class PersistenceFailure(TaskServiceError):
    def __init__(self, operation: str, cause: BaseException | str | None = None) -> None:
        detail = f": {cause}" if cause else ""
        super().__init__(f"Task store {operation} failed{detail}")
        self.operation = operation
        self.cause = cause
