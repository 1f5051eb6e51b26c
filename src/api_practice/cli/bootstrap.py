# src/api_practice/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete adapters (SQLite store, HTTP clients) into TaskService.
"""

from __future__ import annotations

import logging

from ..clients.http import build_http_client
from ..clients.notification import HttpNotificationClient, LoggingNotificationClient
from ..clients.user_validation import HttpUserValidationClient
from ..config import get_settings
from ..core.ports import NotificationClient
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from ..usecase.task_service import TaskService

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_app_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    http = build_http_client(settings)

    notifier: NotificationClient
    if settings.notifications_enabled:
        notifier = HttpNotificationClient(http, settings.notification_api_url)
    else:
        notifier = LoggingNotificationClient()

    task_store = TaskStore(settings.tasks_db_path)
    service = TaskService(
        task_repo=task_store,
        notification_client=notifier,
        user_validation_client=HttpUserValidationClient(http, settings.user_validation_api_url),
    )
    logger.info(
        "Wired TaskService users=%s notifications=%s",
        settings.user_validation_api_url,
        settings.notification_api_url if settings.notifications_enabled else "disabled",
    )
    return AppState(settings=settings, task_store=task_store, task_service=service, http=http)
