# src/api_practice/clients/notification.py

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

TASK_CREATED_EVENT = "TASK_CREATED"


class HttpNotificationClient:
    """
    Best-effort "task created" notifications.

    POST {url} with {"taskId", "title", "event": "TASK_CREATED"}.
    The response body is ignored. Transport errors and non-2xx statuses are
    logged and swallowed; the call is bounded by the client's timeouts.
    """

    def __init__(self, http: httpx.Client, url: str) -> None:
        self._http = http
        self._url = url

    def notify_task_created(self, task_id: int, title: str) -> None:
        payload = {
            "taskId": task_id,
            "title": title,
            "event": TASK_CREATED_EVENT,
        }
        try:
            resp = self._http.post(self._url, json=payload)
        except Exception as e:
            # Runs after commit: nothing may escape to the caller.
            logger.warning(
                "Failed to send notification task_id=%s: %s", task_id, e, exc_info=True
            )
            return

        if resp.is_success:
            logger.debug("Notification sent task_id=%s status=%s", task_id, resp.status_code)
        else:
            logger.warning(
                "Notification rejected task_id=%s status=%s", task_id, resp.status_code
            )


class LoggingNotificationClient:
    """Used when notifications are disabled: the event only goes to the log."""

    def notify_task_created(self, task_id: int, title: str) -> None:
        logger.info("Task created (notifications disabled) task_id=%s title=%r", task_id, title)
