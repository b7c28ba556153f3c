# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from taskapi.domain.users.entities import User as DomainUser
from taskapi.domain.users.exceptions import UserAlreadyExistsError
from taskapi.domain.users.repositories import UserRepository
from taskapi.infrastructure.db.models import Task, User
from taskapi.infrastructure.unit_of_work import unit_of_work_scope

_UPDATABLE = frozenset({"username", "email", "password_hash"})


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


def _duplicate(_exc: Exception) -> Exception:
    return UserAlreadyExistsError()


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _scope(self):
        return unit_of_work_scope(self._session_factory, on_integrity_error=_duplicate)

    def find_by_identifier(self, identifier: str) -> DomainUser | None:
        with self._scope() as session:
            row = session.scalars(
                select(User).where(or_(User.username == identifier, User.email == identifier))
            ).first()
            return _to_domain(row) if row else None

    def exists_with(self, *, username: str, email: str) -> bool:
        with self._scope() as session:
            row_id = session.scalars(
                select(User.id).where(or_(User.username == username, User.email == email))
            ).first()
            return row_id is not None

    def find_conflicting(
        self, *, user_id: int, username: str | None, email: str | None
    ) -> DomainUser | None:
        clauses = []
        if username:
            clauses.append(User.username == username)
        if email:
            clauses.append(User.email == email)
        if not clauses:
            return None
        with self._scope() as session:
            row = session.scalars(
                select(User).where(or_(*clauses), User.id != user_id)
            ).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with self._scope() as session:
            row = User(
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
                created_at=user.created_at,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def update(self, user_id: int, changes: Mapping[str, Any]) -> DomainUser | None:
        with self._scope() as session:
            row = session.get(User, user_id)
            if row is None:
                return None
            for name, value in changes.items():
                if name in _UPDATABLE:
                    setattr(row, name, value)
            session.flush()
            return _to_domain(row)

    def delete(self, user_id: int) -> bool:
        with self._scope() as session:
            row = session.get(User, user_id)
            if row is None:
                return False
            # Explicit so the cascade holds on backends without FK enforcement.
            session.execute(delete(Task).where(Task.user_id == user_id))
            session.delete(row)
            return True
