# tests/test_task_service.py

from __future__ import annotations

from datetime import datetime

import pytest

from api_practice.core.errors import (
    AlreadyCompleted,
    PersistenceFailure,
    TaskNotFound,
    UserNotFound,
    UserValidationUnavailable,
)
from api_practice.tasks.task_models import Task, TaskStatus
from api_practice.usecase.task_service import TaskService

from .fakes import FakeNotificationClient, FakeUserValidationClient, InMemoryTaskRepo


def _stored(task_id: int, status: TaskStatus) -> Task:
    ts = datetime(2024, 1, 1, 10, 0, 0)
    return Task.restore(
        id=task_id,
        title="stored",
        description="from db",
        status=status,
        created_at=ts,
        updated_at=ts,
    )


def test_create_task_happy_path(
    service: TaskService,
    repo: InMemoryTaskRepo,
    notifier: FakeNotificationClient,
    users: FakeUserValidationClient,
) -> None:
    task = service.create_task("user123", "E2E Test Task", "End-to-End test")

    assert task.id == 1
    assert task.title == "E2E Test Task"
    assert task.description == "End-to-End test"
    assert task.status == TaskStatus.TODO
    assert task.created_at == task.updated_at
    assert users.calls == ["user123"]
    assert len(repo.save_calls) == 1
    assert [(n.task_id, n.title) for n in notifier.sent] == [(1, "E2E Test Task")]


def test_create_task_unknown_user_writes_and_notifies_nothing(
    service: TaskService, repo: InMemoryTaskRepo, notifier: FakeNotificationClient
) -> None:
    with pytest.raises(UserNotFound) as exc_info:
        service.create_task("unknown-user", "X", "Y")

    assert exc_info.value.user_id == "unknown-user"
    assert repo.save_calls == []
    assert notifier.sent == []


def test_create_task_validation_outage_propagates(
    repo: InMemoryTaskRepo, notifier: FakeNotificationClient
) -> None:
    service = TaskService(repo, notifier, FakeUserValidationClient(unavailable=True))

    with pytest.raises(UserValidationUnavailable):
        service.create_task("user123", "X", "Y")

    assert repo.save_calls == []
    assert notifier.sent == []


def test_create_task_blank_title_is_rejected_before_saving(
    service: TaskService, repo: InMemoryTaskRepo, notifier: FakeNotificationClient
) -> None:
    with pytest.raises(ValueError):
        service.create_task("user123", " ", "Y")

    assert repo.save_calls == []
    assert notifier.sent == []


def test_create_task_save_failure_sends_no_notification(
    notifier: FakeNotificationClient, users: FakeUserValidationClient
) -> None:
    class FailingRepo(InMemoryTaskRepo):
        def save(self, task: Task) -> Task:
            raise PersistenceFailure("save", "disk full")

    service = TaskService(FailingRepo(), notifier, users)

    with pytest.raises(PersistenceFailure):
        service.create_task("user123", "X", "Y")

    assert notifier.sent == []


def test_get_task_missing(service: TaskService) -> None:
    with pytest.raises(TaskNotFound) as exc_info:
        service.get_task(9999)

    assert exc_info.value.task_id == 9999


def test_complete_done_task_fails_without_saving(
    notifier: FakeNotificationClient, users: FakeUserValidationClient
) -> None:
    repo = InMemoryTaskRepo([_stored(5, TaskStatus.DONE)])
    service = TaskService(repo, notifier, users)

    with pytest.raises(AlreadyCompleted) as exc_info:
        service.complete_task(5)

    assert exc_info.value.task_id == 5
    assert repo.save_calls == []


def test_complete_task_happy_path(
    notifier: FakeNotificationClient, users: FakeUserValidationClient
) -> None:
    repo = InMemoryTaskRepo([_stored(1, TaskStatus.TODO)])
    service = TaskService(repo, notifier, users)

    done = service.complete_task(1)

    assert done.status == TaskStatus.DONE
    assert done.updated_at > done.created_at
    assert service.get_task(1).status == TaskStatus.DONE
    assert notifier.sent == []


def test_complete_missing_task(service: TaskService, repo: InMemoryTaskRepo) -> None:
    with pytest.raises(TaskNotFound):
        service.complete_task(404)

    assert repo.save_calls == []


def test_operations_run_inside_transactions(service: TaskService, repo: InMemoryTaskRepo) -> None:
    task = service.create_task("user123", "t", "")
    service.get_task(task.id)
    service.complete_task(task.id)

    # create + get + complete (complete also enters once more through get_task)
    assert repo.transactions == 4
