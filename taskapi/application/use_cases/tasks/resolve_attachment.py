# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os

from taskapi.domain.tasks.exceptions import AttachmentNotFoundError, TaskNotFoundError
from taskapi.domain.tasks.repositories import TaskRepository


class ResolveAttachmentUseCase:
    """Map a requested file name onto one of the task's stored paths."""

    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int, task_id: int, filename: str) -> str | None:
        task = self._tasks.find_owned(owner_id, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if not filename:
            return None
        for path in task.attachments:
            if os.path.basename(path) == filename or path.endswith(filename):
                return path
        return None

    def first(self, owner_id: int, task_id: int) -> str:
        task = self._tasks.find_owned(owner_id, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if not task.attachments:
            raise AttachmentNotFoundError()
        return task.attachments[0]
