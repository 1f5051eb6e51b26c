# src/api_practice/usecase/task_service.py

from __future__ import annotations

"""
Task use cases.

TaskService composes the three ports:
- UserValidationClient: is the referenced user known to the remote service?
- TaskRepo: atomic persistence (transaction() is the atomic boundary)
- NotificationClient: best-effort "task created" event

It holds no mutable state of its own, so a single instance can serve
concurrent requests from many threads.
"""

import logging

from ..core.errors import TaskNotFound, UserNotFound
from ..core.ports import NotificationClient, TaskRepo, UserValidationClient
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(
        self,
        task_repo: TaskRepo,
        notification_client: NotificationClient,
        user_validation_client: UserValidationClient,
    ) -> None:
        self._tasks = task_repo
        self._notifications = notification_client
        self._users = user_validation_client

    def create_task(self, user_id: str, title: str, description: str | None = "") -> Task:
        """
        Create a task on behalf of user_id.

        Order:
        1. user check (UserNotFound / UserValidationUnavailable stop everything)
        2. build + save inside one write transaction
        3. notify after commit, so a rolled-back task is never announced
        """
        if not self._users.exists_user(user_id):
            logger.info("Task creation rejected: unknown user=%s", user_id)
            raise UserNotFound(user_id)

        with self._tasks.transaction():
            task = Task.create(title, description)
            saved = self._tasks.save(task)

        # saved.id is always set here: save() assigns it.
        self._notifications.notify_task_created(saved.id, saved.title)  # type: ignore[arg-type]

        logger.info("Task created id=%s user=%s", saved.id, user_id)
        return saved

    def get_task(self, task_id: int) -> Task:
        with self._tasks.transaction(read_only=True):
            task = self._tasks.find_by_id(task_id)
        if task is None:
            logger.debug("Task lookup miss id=%s", task_id)
            raise TaskNotFound(task_id)
        return task

    def complete_task(self, task_id: int) -> Task:
        with self._tasks.transaction():
            task = self.get_task(task_id)
            task.complete()
            saved = self._tasks.save(task)

        logger.info("Task completed id=%s", task_id)
        return saved
