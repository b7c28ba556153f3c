# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.tasks.entities import Task
from taskapi.domain.tasks.exceptions import TaskNotFoundError
from taskapi.domain.tasks.repositories import TaskRepository


class GetTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int, task_id: int) -> Task:
        # Foreign and missing tasks are indistinguishable to the caller.
        task = self._tasks.find_owned(owner_id, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
