# src/api_practice/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No network or disk access at import time beyond reading .env.

Environment variables (all prefixed with APIPRACTICE_):
- APP_NAME, LOG_LEVEL
- HOST, PORT
- DATA_DIR, TASKS_DB_PATH
- NOTIFICATION_API_URL, NOTIFICATIONS_ENABLED
- USER_VALIDATION_API_URL
- HTTP_CONNECT_TIMEOUT_SECONDS, HTTP_READ_TIMEOUT_SECONDS
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "APIPRACTICE"

DEFAULT_NOTIFICATION_API_URL = "http://localhost:8081/notifications"
DEFAULT_USER_VALIDATION_API_URL = "http://localhost:8082/api/users"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_url(name: str, default: str) -> str:
    return (_env(name, default).strip() or default).rstrip("/")


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- HTTP server ----
    host: str
    port: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path

    # ---- Remote services ----
    notification_api_url: str
    notifications_enabled: bool
    user_validation_api_url: str

    # ---- Outbound HTTP ----
    http_connect_timeout: float
    http_read_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "api-practice").strip() or "api-practice"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "127.0.0.1").strip() or "127.0.0.1"
        port = _env_int(_k("PORT"), 8080)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/api_practice"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        notification_api_url = _env_url(_k("NOTIFICATION_API_URL"), DEFAULT_NOTIFICATION_API_URL)
        notifications_enabled = _env_bool(_k("NOTIFICATIONS_ENABLED"), True)
        user_validation_api_url = _env_url(
            _k("USER_VALIDATION_API_URL"), DEFAULT_USER_VALIDATION_API_URL
        )

        # A timeout must exist: non-positive values fall back to defaults.
        http_connect_timeout = _env_float(_k("HTTP_CONNECT_TIMEOUT_SECONDS"), 5.0)
        if http_connect_timeout <= 0:
            http_connect_timeout = 5.0
        http_read_timeout = _env_float(_k("HTTP_READ_TIMEOUT_SECONDS"), 10.0)
        if http_read_timeout <= 0:
            http_read_timeout = 10.0

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            notification_api_url=notification_api_url,
            notifications_enabled=notifications_enabled,
            user_validation_api_url=user_validation_api_url,
            http_connect_timeout=http_connect_timeout,
            http_read_timeout=http_read_timeout,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
