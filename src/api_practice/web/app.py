# src/api_practice/web/app.py

"""
HTTP surface.

Three endpoints on top of TaskService:
- POST /tasks                 -> 201 + task
- GET  /tasks/{task_id}       -> 200 + task
- POST /tasks/{task_id}/complete -> 200 + task

Handlers are plain `def` functions: FastAPI runs them in its worker thread
pool, which is where the blocking port calls belong.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import (
    AlreadyCompleted,
    PersistenceFailure,
    TaskNotFound,
    TaskServiceError,
    UserNotFound,
    UserValidationUnavailable,
)
from ..usecase.task_service import TaskService
from .schemas import CreateTaskRequest, ErrorResponse, TaskResponse

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[TaskServiceError], int] = {
    TaskNotFound: status.HTTP_404_NOT_FOUND,
    UserNotFound: status.HTTP_400_BAD_REQUEST,
    AlreadyCompleted: status.HTTP_400_BAD_REQUEST,
    UserValidationUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    PersistenceFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorResponse(message=message).model_dump(), status_code=status_code)


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query"))
        msg = str(err.get("msg", "invalid value"))
        # pydantic prefixes messages from our own validators.
        msg = msg.removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def status_for(exc: TaskServiceError) -> int:
    for cls in type(exc).__mro__:
        code = _STATUS_BY_ERROR.get(cls)  # type: ignore[arg-type]
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(service: TaskService, *, title: str = "api-practice") -> FastAPI:
    app = FastAPI(title=title)
    app.state.task_service = service

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.debug("Bad request %s %s: %s", request.method, request.url.path, message)
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(TaskServiceError)
    async def _on_service_error(request: Request, exc: TaskServiceError) -> JSONResponse:
        code = status_for(exc)
        if code >= 500:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
            )
        return _error(code, exc.message)

    @app.post(
        "/tasks",
        status_code=status.HTTP_201_CREATED,
        response_model=TaskResponse,
        responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    def create_task(body: CreateTaskRequest):
        try:
            task = service.create_task(body.userId, body.title, body.description)
        except ValueError as e:
            return _error(status.HTTP_400_BAD_REQUEST, str(e))
        return TaskResponse.from_task(task)

    @app.get(
        "/tasks/{task_id}",
        response_model=TaskResponse,
        responses={404: {"model": ErrorResponse}},
    )
    def get_task(task_id: int):
        return TaskResponse.from_task(service.get_task(task_id))

    @app.post(
        "/tasks/{task_id}/complete",
        response_model=TaskResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def complete_task(task_id: int):
        return TaskResponse.from_task(service.complete_task(task_id))

    return app
