# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task listing in two mutually exclusive modes.

Cursor mode walks ids in ascending order (``id > cursor``) and fetches one
extra row to learn whether another batch exists. Page mode is classic
offset/limit with an allow-listed sort column and a status-filtered total.
"""

from __future__ import annotations

import math
from typing import Any

from taskapi.application.services.task_fields import clean_optional_status
from taskapi.domain.tasks.entities import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    MAX_PAGE_SIZE,
    SORT_FIELDS,
    CursorPagination,
    PagePagination,
    SortOrder,
    TaskListQuery,
    TaskListResult,
)
from taskapi.domain.tasks.repositories import TaskRepository
from taskapi.shared.errors.base import ValidationError
from taskapi.shared.logging import logger

# Largest value SQLite (and most SQL backends) accept as a bound integer.
MAX_SQL_INT = 2**63 - 1


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_limit(value: Any) -> int:
    limit = _to_int(value)
    if limit is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(limit, MAX_PAGE_SIZE))


def normalize_page(value: Any, limit: int = DEFAULT_PAGE_SIZE) -> int:
    page = _to_int(value)
    if page is None:
        return 1
    # keep (page - 1) * limit within range of an SQL OFFSET
    return max(1, min(page, MAX_SQL_INT // limit + 1))


def normalize_sort(sort_by: Any, sort_order: Any) -> tuple[str, SortOrder]:
    field = str(sort_by).strip() if sort_by is not None else ""
    if field not in SORT_FIELDS:
        field = DEFAULT_SORT_FIELD
    order = str(sort_order).strip().upper() if sort_order is not None else ""
    return field, SortOrder.ASC if order == SortOrder.ASC.value else SortOrder.DESC


class ListTasksUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, owner_id: int, query: TaskListQuery) -> TaskListResult:
        status = clean_optional_status(query.status)
        limit = normalize_limit(query.limit)

        cursor = query.cursor
        if isinstance(cursor, str) and not cursor.strip():
            cursor = None

        if cursor is not None:
            return self._by_cursor(owner_id, cursor, limit, status)
        return self._by_page(owner_id, query, limit, status)

    def _by_cursor(self, owner_id, cursor, limit, status) -> TaskListResult:
        start = _to_int(cursor)
        if start is None or not 0 <= start <= MAX_SQL_INT:
            raise ValidationError(
                "invalid_cursor",
                message="Cursor must be a non-negative 64-bit integer",
                context={"cursor": str(cursor)},
            )

        rows = list(self._tasks.list_after(owner_id, cursor=start, limit=limit + 1, status=status))
        has_more = len(rows) > limit
        tasks = rows[:limit]
        next_cursor = tasks[-1].id if has_more and tasks else None

        logger.debug(
            f"tasks.list: cursor (user_id={owner_id} cursor={start} "
            f"returned={len(tasks)} has_more={has_more})"
        )
        return TaskListResult(
            tasks=tasks,
            pagination=CursorPagination(limit=limit, has_more=has_more, next_cursor=next_cursor),
        )

    def _by_page(self, owner_id, query: TaskListQuery, limit, status) -> TaskListResult:
        page = normalize_page(query.page, limit)
        sort_by, sort_order = normalize_sort(query.sort_by, query.sort_order)

        total = self._tasks.count(owner_id, status)
        tasks = list(
            self._tasks.list_page(
                owner_id,
                offset=(page - 1) * limit,
                limit=limit,
                sort_by=sort_by,
                descending=sort_order is SortOrder.DESC,
                status=status,
            )
        )
        total_pages = math.ceil(total / limit) if total else 0

        logger.debug(
            f"tasks.list: page (user_id={owner_id} page={page} limit={limit} "
            f"sort={sort_by}:{sort_order.value} total={total})"
        )
        return TaskListResult(
            tasks=tasks,
            pagination=PagePagination(
                page=page,
                limit=limit,
                total_pages=total_pages,
                total_count=total,
                has_more=page < total_pages,
            ),
        )
