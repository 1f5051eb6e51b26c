# src/api_practice/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task use cases.

The use cases depend on Protocols instead of concrete implementations.
This keeps storage and remote services swappable and makes testing easier.
"""

from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Task persistence.

    Everything done inside one transaction() block becomes visible atomically
    on success and is discarded on failure.
    """

    def save(self, task: Task) -> Task: ...
    def find_by_id(self, task_id: int) -> Task | None: ...
    def transaction(self, *, read_only: bool = False) -> AbstractContextManager[None]: ...


class UserValidationClient(Protocol):
    """
    Remote user existence check.

    True/False only on a definite answer; otherwise raises UserValidationUnavailable.
    """

    def exists_user(self, user_id: str) -> bool: ...


class NotificationClient(Protocol):
    """Best-effort "task created" event. Implementations must never raise."""

    def notify_task_created(self, task_id: int, title: str) -> None: ...
