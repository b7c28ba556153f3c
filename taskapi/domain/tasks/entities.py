# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task entities and the value objects used to page through them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_FIELDS = ("id", "title", "due_date", "status", "created_at", "updated_at")
DEFAULT_SORT_FIELD = "created_at"

TASK_FIELDS = frozenset({"title", "description", "due_date", "status"})


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(slots=True, frozen=True)
class Task:
    """A to-do item owned by exactly one user."""

    id: int
    owner_id: int
    title: str
    description: str | None
    due_date: date | None
    status: TaskStatus
    attachments: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "due_date": _iso(self.due_date),
            "status": self.status.value,
            "attachments": list(self.attachments),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass(slots=True, frozen=True)
class NewTask:
    """Validated input for a task that has not been persisted yet."""

    owner_id: int
    title: str
    description: str | None = None
    due_date: date | None = None
    status: TaskStatus = TaskStatus.PENDING
    attachments: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class TaskStats:

    total: int
    pending: int
    completed: int

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "pending": self.pending, "completed": self.completed}


@dataclass(slots=True, frozen=True)
class TaskListQuery:
    """Raw listing options as received from the caller.

    A non-blank ``cursor`` selects cursor mode; otherwise page mode is used
    and ``page``/``sort_by``/``sort_order`` apply.
    """

    limit: int | str | None = None
    cursor: int | str | None = None
    status: str | None = None
    page: int | str | None = None
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass(slots=True, frozen=True)
class CursorPagination:

    limit: int
    has_more: bool
    next_cursor: int | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "limit": self.limit,
            "hasMore": self.has_more,
            "nextCursor": self.next_cursor,
        }


@dataclass(slots=True, frozen=True)
class PagePagination:

    page: int
    limit: int
    total_pages: int
    total_count: int
    has_more: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "totalCount": self.total_count,
            "hasMore": self.has_more,
        }


@dataclass(slots=True, frozen=True)
class TaskListResult:

    tasks: list[Task] = field(default_factory=list)
    pagination: CursorPagination | PagePagination | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "pagination": self.pagination.to_dict() if self.pagination else None,
        }
