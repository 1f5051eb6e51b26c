# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from api_practice.config import (
    DEFAULT_NOTIFICATION_API_URL,
    DEFAULT_USER_VALIDATION_API_URL,
    Settings,
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in list(os.environ):
        if name.startswith("APIPRACTICE_"):
            monkeypatch.delenv(name)
    return monkeypatch


def test_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()

    assert s.notification_api_url == DEFAULT_NOTIFICATION_API_URL
    assert s.user_validation_api_url == DEFAULT_USER_VALIDATION_API_URL
    assert s.notifications_enabled is True
    assert s.tasks_db_path == s.data_dir / "tasks.sqlite3"
    assert s.port == 8080
    assert s.http_connect_timeout > 0 and s.http_read_timeout > 0


def test_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("APIPRACTICE_DATA_DIR", str(tmp_path))
    clean_env.setenv("APIPRACTICE_USER_VALIDATION_API_URL", "http://users.internal/api/users/")
    clean_env.setenv("APIPRACTICE_NOTIFICATIONS_ENABLED", "no")
    clean_env.setenv("APIPRACTICE_PORT", "9090")
    clean_env.setenv("APIPRACTICE_HTTP_READ_TIMEOUT_SECONDS", "2.5")

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.user_validation_api_url == "http://users.internal/api/users"
    assert s.notifications_enabled is False
    assert s.port == 9090
    assert s.http_read_timeout == 2.5


def test_malformed_numbers_fall_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("APIPRACTICE_PORT", "eighty")
    clean_env.setenv("APIPRACTICE_HTTP_CONNECT_TIMEOUT_SECONDS", "-1")

    s = Settings.from_env()

    assert s.port == 8080
    assert s.http_connect_timeout == 5.0
