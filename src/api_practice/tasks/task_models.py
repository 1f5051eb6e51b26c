# src/api_practice/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from ..core.errors import AlreadyCompleted


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - TODO is the only state produced by Task.create().
    - IN_PROGRESS is never written by this service; it can only appear in rows
      written by someone else.
    - DONE is terminal.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            raise ValueError("task status is missing")
        return cls(raw.strip().upper())


def _now() -> datetime:
    return datetime.now()


@dataclass(slots=True)
class Task:
    id: int | None
    title: str
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, title: str, description: str | None = "") -> Task:
        """New unsaved task: TODO, no id, created_at == updated_at."""
        if not title or not title.strip():
            raise ValueError("Title is required")
        now = _now()
        return cls(
            id=None,
            title=title,
            description=description or "",
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def restore(
        cls,
        *,
        id: int,
        title: str,
        description: str | None,
        status: TaskStatus,
        created_at: datetime,
        updated_at: datetime,
    ) -> Task:
        """
        Rebuild a previously saved task.

        Only persistence adapters should call this. Stored timestamps are kept as-is.
        """
        return cls(
            id=id,
            title=title,
            description=description or "",
            status=status,
            created_at=created_at,
            updated_at=updated_at,
        )

    def can_complete(self) -> bool:
        return self.status != TaskStatus.DONE

    def complete(self) -> None:
        if not self.can_complete():
            raise AlreadyCompleted(self.id)
        self.status = TaskStatus.DONE
        self._touch()

    def _touch(self) -> None:
        # updated_at must strictly increase, even on a coarse clock.
        now = _now()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now
