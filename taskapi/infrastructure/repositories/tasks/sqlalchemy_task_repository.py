# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from taskapi.domain.tasks.entities import NewTask, TaskStatus
from taskapi.domain.tasks.entities import Task as DomainTask
from taskapi.domain.tasks.repositories import TaskRepository
from taskapi.infrastructure.db.models import Task
from taskapi.infrastructure.unit_of_work import unit_of_work_scope

# Sort keys are looked up here, never interpolated into SQL.
_SORT_COLUMNS = {
    "id": Task.id,
    "title": Task.title,
    "due_date": Task.due_date,
    "status": Task.status,
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
}


def _to_domain(row: Task) -> DomainTask:
    return DomainTask(
        id=row.id,
        owner_id=row.user_id,
        title=row.title,
        description=row.description,
        due_date=row.due_date,
        status=TaskStatus(row.status),
        attachments=tuple(row.attachments or ()),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @staticmethod
    def _owned(owner_id: int, status: TaskStatus | None = None):
        stmt = select(Task).where(Task.user_id == owner_id)
        if status is not None:
            stmt = stmt.where(Task.status == status.value)
        return stmt

    def add(self, task: NewTask) -> DomainTask:
        with unit_of_work_scope(self._session_factory) as session:
            row = Task(
                user_id=task.owner_id,
                title=task.title,
                description=task.description,
                due_date=task.due_date,
                status=task.status.value,
                attachments=list(task.attachments),
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def find_owned(self, owner_id: int, task_id: int) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(self._owned(owner_id).where(Task.id == task_id)).first()
            return _to_domain(row) if row else None

    def list_after(
        self,
        owner_id: int,
        *,
        cursor: int,
        limit: int,
        status: TaskStatus | None = None,
    ) -> Sequence[DomainTask]:
        stmt = (
            self._owned(owner_id, status)
            .where(Task.id > cursor)
            .order_by(Task.id.asc())
            .limit(limit)
        )
        with unit_of_work_scope(self._session_factory) as session:
            return [_to_domain(row) for row in session.scalars(stmt)]

    def list_page(
        self,
        owner_id: int,
        *,
        offset: int,
        limit: int,
        sort_by: str,
        descending: bool,
        status: TaskStatus | None = None,
    ) -> Sequence[DomainTask]:
        column = _SORT_COLUMNS.get(sort_by, Task.created_at)
        if descending:
            ordering = (column.desc(), Task.id.desc())
        else:
            ordering = (column.asc(), Task.id.asc())
        stmt = self._owned(owner_id, status).order_by(*ordering).offset(offset).limit(limit)
        with unit_of_work_scope(self._session_factory) as session:
            return [_to_domain(row) for row in session.scalars(stmt)]

    def count(self, owner_id: int, status: TaskStatus | None = None) -> int:
        stmt = select(func.count(Task.id)).where(Task.user_id == owner_id)
        if status is not None:
            stmt = stmt.where(Task.status == status.value)
        with unit_of_work_scope(self._session_factory) as session:
            return int(session.scalar(stmt) or 0)

    def update(
        self, owner_id: int, task_id: int, changes: Mapping[str, Any]
    ) -> DomainTask | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(self._owned(owner_id).where(Task.id == task_id)).first()
            if row is None:
                return None
            for name, value in changes.items():
                if name == "status":
                    value = TaskStatus(value).value
                elif name == "attachments":
                    value = list(value)
                setattr(row, name, value)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def delete(self, owner_id: int, task_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(self._owned(owner_id).where(Task.id == task_id)).first()
            if row is None:
                return False
            session.delete(row)
            return True

    def attachments_for_owner(self, owner_id: int) -> list[str]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(Task.attachments).where(Task.user_id == owner_id)
            ).all()
        return [path for attachments in rows for path in (attachments or [])]
