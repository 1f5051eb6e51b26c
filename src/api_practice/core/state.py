# src/api_practice/core/state.py

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from typing import Any

from ..usecase.task_service import TaskService
from .ports import TaskRepo

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo
    task_service: TaskService

    # Shared outbound HTTP client (httpx.Client); None when nothing needs it.
    http: Any | None = None

    def close(self) -> None:
        """Release outbound connections. Safe to call more than once."""
        http, self.http = self.http, None
        if http is None:
            return
        with contextlib.suppress(Exception):
            http.close()
        logger.debug("HTTP client closed.")
