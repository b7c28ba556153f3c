# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from taskapi.application.services.task_fields import (
    clean_description,
    clean_due_date,
    clean_status,
    clean_title,
)
from taskapi.domain.tasks.entities import NewTask, Task, TaskStatus
from taskapi.domain.tasks.repositories import TaskRepository
from taskapi.shared.logging import logger


class CreateTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(
        self,
        owner_id: int,
        fields: Mapping[str, Any],
        attachments: Sequence[str] = (),
    ) -> Task:
        status = fields.get("status")
        new_task = NewTask(
            owner_id=owner_id,
            title=clean_title(fields.get("title")),
            description=clean_description(fields.get("description")),
            due_date=clean_due_date(fields.get("due_date")),
            status=clean_status(status) if status not in (None, "") else TaskStatus.PENDING,
            attachments=tuple(attachments),
        )
        task = self._tasks.add(new_task)
        logger.info(
            f"tasks.create: ok (user_id={owner_id} task_id={task.id} "
            f"attachments={len(task.attachments)})"
        )
        return task
