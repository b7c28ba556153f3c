# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.application.services.attachments import discard_attachments
from taskapi.domain.tasks.exceptions import TaskNotFoundError
from taskapi.domain.tasks.repositories import AttachmentStorage, TaskRepository
from taskapi.shared.logging import logger


class DeleteTaskUseCase:
    def __init__(self, *, tasks: TaskRepository, storage: AttachmentStorage) -> None:
        self._tasks = tasks
        self._storage = storage

    def execute(self, owner_id: int, task_id: int) -> None:
        task = self._tasks.find_owned(owner_id, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        removed = discard_attachments(self._storage, task.attachments)
        if not self._tasks.delete(owner_id, task_id):
            raise TaskNotFoundError(task_id)
        logger.info(
            f"tasks.delete: ok (user_id={owner_id} task_id={task_id} files_removed={removed})"
        )
