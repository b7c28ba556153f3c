# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .entities import NewTask, Task, TaskStatus


class TaskRepository(Protocol):
    def add(self, task: NewTask) -> Task: ...

    def find_owned(self, owner_id: int, task_id: int) -> Task | None: ...

    def list_after(
        self,
        owner_id: int,
        *,
        cursor: int,
        limit: int,
        status: TaskStatus | None = None,
    ) -> Sequence[Task]: ...

    def list_page(
        self,
        owner_id: int,
        *,
        offset: int,
        limit: int,
        sort_by: str,
        descending: bool,
        status: TaskStatus | None = None,
    ) -> Sequence[Task]: ...

    def count(self, owner_id: int, status: TaskStatus | None = None) -> int: ...

    def update(
        self, owner_id: int, task_id: int, changes: Mapping[str, Any]
    ) -> Task | None: ...

    def delete(self, owner_id: int, task_id: int) -> bool: ...

    def attachments_for_owner(self, owner_id: int) -> list[str]: ...


class AttachmentStorage(Protocol):
    def delete(self, path: str) -> None: ...

    def exists(self, path: str) -> bool: ...
