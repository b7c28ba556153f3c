# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from taskapi.application.services.attachments import discard_attachments
from taskapi.application.services.task_fields import clean_task_changes
from taskapi.domain.tasks.entities import Task
from taskapi.domain.tasks.exceptions import TaskNotFoundError
from taskapi.domain.tasks.repositories import AttachmentStorage, TaskRepository
from taskapi.shared.errors.base import ValidationError
from taskapi.shared.logging import logger


class UpdateTaskUseCase:
    def __init__(self, *, tasks: TaskRepository, storage: AttachmentStorage) -> None:
        self._tasks = tasks
        self._storage = storage

    def execute(
        self,
        owner_id: int,
        task_id: int,
        fields: Mapping[str, Any],
        attachments: Sequence[str] | None = None,
    ) -> Task:
        existing = self._tasks.find_owned(owner_id, task_id)
        if existing is None:
            raise TaskNotFoundError(task_id)

        changes = clean_task_changes(fields)
        if attachments:
            changes["attachments"] = tuple(attachments)
        if not changes:
            raise ValidationError("no_changes", message="No fields to update")

        updated = self._tasks.update(owner_id, task_id, changes)
        if updated is None:
            raise TaskNotFoundError(task_id)

        if "attachments" in changes:
            stale = [p for p in existing.attachments if p not in changes["attachments"]]
            discard_attachments(self._storage, stale)

        logger.info(
            f"tasks.update: ok (user_id={owner_id} task_id={task_id} "
            f"fields={sorted(changes)})"
        )
        return updated
