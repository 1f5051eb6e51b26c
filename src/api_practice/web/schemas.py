# src/api_practice/web/schemas.py

"""Request/response bodies of the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from ..tasks.task_models import Task, TaskStatus


class CreateTaskRequest(BaseModel):
    userId: str
    title: str
    description: str | None = ""

    @field_validator("userId")
    @classmethod
    def _user_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("User ID is required")
        return v

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_task(cls, task: Task) -> TaskResponse:
        # Never serialize the entity directly.
        if task.id is None:
            raise ValueError("cannot serialize an unsaved task")
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            createdAt=task.created_at,
            updatedAt=task.updated_at,
        )


class ErrorResponse(BaseModel):
    message: str
