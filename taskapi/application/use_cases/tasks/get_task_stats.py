# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.tasks.entities import TaskStats, TaskStatus
from taskapi.domain.tasks.repositories import TaskRepository


class GetTaskStatsUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int) -> TaskStats:
        return TaskStats(
            total=self._tasks.count(owner_id),
            pending=self._tasks.count(owner_id, TaskStatus.PENDING),
            completed=self._tasks.count(owner_id, TaskStatus.COMPLETED),
        )
