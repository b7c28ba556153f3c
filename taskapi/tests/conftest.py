from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="taskapi-tests-"))

# Must be in place before anything imports taskapi (config is cached on first load).
os.environ["APP_ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy"
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_ROOT / 'taskapi-test.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP_ROOT / "uploads")
os.environ["LOG_FILE"] = str(_TMP_ROOT / "app.log")
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["PASSWORD_HASH_METHOD"] = "pbkdf2:sha256:1000"
os.environ["LOGIN_MAX_ATTEMPTS"] = "3"

import pytest  # noqa: E402

from taskapi.domain.tasks.entities import NewTask, Task, TaskStatus  # noqa: E402
from taskapi.domain.users.entities import TokenClaims, User  # noqa: E402
from taskapi.domain.users.exceptions import InvalidTokenError  # noqa: E402


class InMemoryUserRepository:
    def __init__(self, tasks: "InMemoryTaskRepository | None" = None) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self._tasks = tasks

    def find_by_identifier(self, identifier: str) -> User | None:
        for user in self._users.values():
            if identifier in (user.username, user.email):
                return user
        return None

    def exists_with(self, *, username: str, email: str) -> bool:
        return any(u.username == username or u.email == email for u in self._users.values())

    def find_conflicting(self, *, user_id, username, email) -> User | None:
        for user in self._users.values():
            if user.id == user_id:
                continue
            if (username and user.username == username) or (email and user.email == email):
                return user
        return None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        stored = replace(user, id=self._seq)
        self._seq += 1
        self._users[stored.id] = stored
        return stored

    def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = replace(user, **dict(changes))
        self._users[user_id] = updated
        return updated

    def delete(self, user_id: int) -> bool:
        if self._users.pop(user_id, None) is None:
            return False
        if self._tasks is not None:
            self._tasks.drop_owner(user_id)
        return True


class InMemoryTaskRepository:
    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._seq = 1
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _owned(self, owner_id: int, status: TaskStatus | None = None) -> list[Task]:
        return [
            t
            for t in self._tasks.values()
            if t.owner_id == owner_id and (status is None or t.status == status)
        ]

    def add(self, task: NewTask) -> Task:
        now = self._tick()
        stored = Task(
            id=self._seq,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            status=task.status,
            attachments=tuple(task.attachments),
            created_at=now,
            updated_at=now,
        )
        self._seq += 1
        self._tasks[stored.id] = stored
        return stored

    def find_owned(self, owner_id: int, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task if task is not None and task.owner_id == owner_id else None

    def list_after(self, owner_id, *, cursor, limit, status=None) -> Sequence[Task]:
        rows = sorted(
            (t for t in self._owned(owner_id, status) if t.id > cursor), key=lambda t: t.id
        )
        return rows[:limit]

    def list_page(
        self, owner_id, *, offset, limit, sort_by, descending, status=None
    ) -> Sequence[Task]:
        def key(task: Task):
            value = getattr(task, sort_by)
            if isinstance(value, TaskStatus):
                value = value.value
            return (value is None, value, task.id)

        rows = sorted(self._owned(owner_id, status), key=key, reverse=descending)
        return rows[offset : offset + limit]

    def count(self, owner_id: int, status: TaskStatus | None = None) -> int:
        return len(self._owned(owner_id, status))

    def update(self, owner_id, task_id, changes) -> Task | None:
        task = self.find_owned(owner_id, task_id)
        if task is None:
            return None
        values = dict(changes)
        if "attachments" in values:
            values["attachments"] = tuple(values["attachments"])
        updated = replace(task, updated_at=self._tick(), **values)
        self._tasks[task_id] = updated
        return updated

    def delete(self, owner_id: int, task_id: int) -> bool:
        if self.find_owned(owner_id, task_id) is None:
            return False
        del self._tasks[task_id]
        return True

    def attachments_for_owner(self, owner_id: int) -> list[str]:
        return [p for t in self._owned(owner_id) for p in t.attachments]

    def drop_owner(self, owner_id: int) -> None:
        for task in self._owned(owner_id):
            del self._tasks[task.id]


class RecordingStorage:
    def __init__(self, existing: Sequence[str] = ()) -> None:
        self.files: set[str] = set(existing)
        self.deleted: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files

    def delete(self, path: str) -> None:
        self.files.discard(path)
        self.deleted.append(path)


class DeterministicHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class CountingTokenService:
    """Tokens of the form ``token-<user>-<n>``; verification just parses them."""

    def __init__(self) -> None:
        self._issued = 0

    def issue(self, user_id: int) -> str:
        self._issued += 1
        return f"token-{user_id}-{self._issued}"

    def verify(self, token: str) -> TokenClaims:
        parts = token.split("-")
        if len(parts) != 3 or parts[0] != "token":
            raise InvalidTokenError()
        now = datetime.now(UTC)
        return TokenClaims(
            owner_id=int(parts[1]), issued_at=now, expires_at=now + timedelta(hours=1)
        )


@pytest.fixture()
def task_repo() -> InMemoryTaskRepository:
    return InMemoryTaskRepository()


@pytest.fixture()
def user_repo(task_repo: InMemoryTaskRepository) -> InMemoryUserRepository:
    return InMemoryUserRepository(task_repo)


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def tokens() -> CountingTokenService:
    return CountingTokenService()


@pytest.fixture()
def upload_dir() -> Path:
    path = Path(os.environ["UPLOAD_DIR"])
    path.mkdir(parents=True, exist_ok=True)
    return path
