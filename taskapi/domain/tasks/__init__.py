# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    CursorPagination,
    NewTask,
    PagePagination,
    Task,
    TaskListQuery,
    TaskListResult,
    TaskStats,
    TaskStatus,
)
from .exceptions import TaskNotFoundError

__all__ = [
    "CursorPagination",
    "NewTask",
    "PagePagination",
    "Task",
    "TaskListQuery",
    "TaskListResult",
    "TaskNotFoundError",
    "TaskStats",
    "TaskStatus",
]
