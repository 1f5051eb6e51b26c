# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from api_practice.tasks.task_store import TaskStore
from api_practice.usecase.task_service import TaskService

from .fakes import FakeNotificationClient, FakeUserValidationClient, InMemoryTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the HTTP client factory.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="api-practice-test",
        log_level="DEBUG",
        host="127.0.0.1",
        port=0,
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        notification_api_url="http://notify.test/notifications",
        notifications_enabled=True,
        user_validation_api_url="http://users.test/api/users",
        http_connect_timeout=1.0,
        http_read_timeout=1.0,
    )


@pytest.fixture()
def task_store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.sqlite3")


@pytest.fixture()
def users() -> FakeUserValidationClient:
    return FakeUserValidationClient({"user123", "u"})


@pytest.fixture()
def notifier() -> FakeNotificationClient:
    return FakeNotificationClient()


@pytest.fixture()
def repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def service(
    repo: InMemoryTaskRepo,
    notifier: FakeNotificationClient,
    users: FakeUserValidationClient,
) -> TaskService:
    return TaskService(repo, notifier, users)
