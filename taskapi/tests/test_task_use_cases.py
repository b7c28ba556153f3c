from __future__ import annotations

from datetime import date

import pytest

from taskapi.application.use_cases.tasks.create_task import CreateTaskUseCase
from taskapi.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from taskapi.application.use_cases.tasks.get_task import GetTaskUseCase
from taskapi.application.use_cases.tasks.get_task_stats import GetTaskStatsUseCase
from taskapi.application.use_cases.tasks.list_tasks import (
    MAX_SQL_INT,
    ListTasksUseCase,
    normalize_limit,
    normalize_page,
    normalize_sort,
)
from taskapi.application.use_cases.tasks.resolve_attachment import ResolveAttachmentUseCase
from taskapi.application.use_cases.tasks.update_task import UpdateTaskUseCase
from taskapi.domain.tasks.entities import SortOrder, TaskListQuery, TaskStatus
from taskapi.domain.tasks.exceptions import AttachmentNotFoundError, TaskNotFoundError
from taskapi.shared.errors import StorageError, ValidationError

OWNER = 1
OTHER = 2


@pytest.fixture()
def create(task_repo) -> CreateTaskUseCase:
    return CreateTaskUseCase(tasks=task_repo)


@pytest.fixture()
def list_tasks(task_repo) -> ListTasksUseCase:
    return ListTasksUseCase(tasks=task_repo)


def _seed(create: CreateTaskUseCase, count: int, owner: int = OWNER) -> list[int]:
    return [create.execute(owner, {"title": f"Task {i}"}).id for i in range(count)]


def test_create_defaults(create) -> None:
    task = create.execute(OWNER, {"title": "Buy milk"})

    assert task.title == "Buy milk"
    assert task.status is TaskStatus.PENDING
    assert task.attachments == ()
    assert task.description is None
    assert task.due_date is None


def test_create_normalizes_fields(create) -> None:
    task = create.execute(
        OWNER,
        {
            "title": "  Report  ",
            "description": "   ",
            "due_date": "2025-03-01T10:30:00",
            "status": "Completed",
        },
        ["uploads/report.pdf"],
    )

    assert task.title == "Report"
    assert task.description is None
    assert task.due_date == date(2025, 3, 1)
    assert task.status is TaskStatus.COMPLETED
    assert task.attachments == ("uploads/report.pdf",)


@pytest.mark.parametrize(
    ("fields", "code"),
    [
        ({"title": ""}, "title_required"),
        ({"title": "   "}, "title_required"),
        ({}, "title_required"),
        ({"title": "x", "status": "archived"}, "invalid_status"),
        ({"title": "x", "due_date": "next tuesday"}, "invalid_due_date"),
    ],
)
def test_create_rejects_invalid_fields(create, fields, code) -> None:
    with pytest.raises(ValidationError) as exc_info:
        create.execute(OWNER, fields)

    assert exc_info.value.code == code


def test_get_task_hides_foreign_tasks(create, task_repo) -> None:
    task = create.execute(OWNER, {"title": "Mine"})
    get = GetTaskUseCase(tasks=task_repo)

    assert get.execute(OWNER, task.id).id == task.id
    with pytest.raises(TaskNotFoundError):
        get.execute(OTHER, task.id)
    with pytest.raises(TaskNotFoundError):
        get.execute(OWNER, 999)


def test_page_mode_splits_fifteen_tasks(create, list_tasks) -> None:
    _seed(create, 15)

    first = list_tasks.execute(OWNER, TaskListQuery(page=1, limit=10))
    second = list_tasks.execute(OWNER, TaskListQuery(page=2, limit=10))

    assert len(first.tasks) == 10
    assert first.pagination.has_more is True
    assert first.pagination.total_pages == 2
    assert first.pagination.total_count == 15
    assert len(second.tasks) == 5
    assert second.pagination.has_more is False
    assert {t.id for t in first.tasks}.isdisjoint({t.id for t in second.tasks})


def test_page_mode_defaults_to_newest_first(create, list_tasks) -> None:
    ids = _seed(create, 3)

    result = list_tasks.execute(OWNER, TaskListQuery())

    assert [t.id for t in result.tasks] == list(reversed(ids))
    assert result.pagination.page == 1
    assert result.pagination.limit == 10


def test_page_mode_sort_by_title_ascending(create, list_tasks) -> None:
    for title in ("banana", "apple", "cherry"):
        create.execute(OWNER, {"title": title})

    result = list_tasks.execute(OWNER, TaskListQuery(sort_by="title", sort_order="asc"))

    assert [t.title for t in result.tasks] == ["apple", "banana", "cherry"]


def test_page_mode_beyond_last_page_is_empty(create, list_tasks) -> None:
    _seed(create, 3)

    result = list_tasks.execute(OWNER, TaskListQuery(page=5, limit=2))

    assert result.tasks == []
    assert result.pagination.total_pages == 2
    assert result.pagination.has_more is False


def test_page_mode_without_tasks(list_tasks) -> None:
    result = list_tasks.execute(OWNER, TaskListQuery())

    assert result.tasks == []
    assert result.pagination.total_pages == 0
    assert result.pagination.has_more is False


def test_cursor_mode_walks_disjoint_batches(create, list_tasks) -> None:
    ids = _seed(create, 12)
    _seed(create, 4, owner=OTHER)

    seen: list[int] = []
    cursor = 0
    while True:
        result = list_tasks.execute(OWNER, TaskListQuery(cursor=cursor, limit=5))
        assert len(result.tasks) <= 5
        seen.extend(t.id for t in result.tasks)
        if not result.pagination.has_more:
            assert result.pagination.next_cursor is None
            break
        assert result.pagination.next_cursor == result.tasks[-1].id
        cursor = result.pagination.next_cursor

    assert seen == ids


def test_cursor_mode_exact_fit_has_no_more(create, list_tasks) -> None:
    _seed(create, 5)

    result = list_tasks.execute(OWNER, TaskListQuery(cursor=0, limit=5))

    assert len(result.tasks) == 5
    assert result.pagination.has_more is False
    assert result.pagination.next_cursor is None
    assert result.to_dict()["pagination"] == {"limit": 5, "hasMore": False, "nextCursor": None}


def test_cursor_mode_rejects_negative_cursor(list_tasks) -> None:
    with pytest.raises(ValidationError):
        list_tasks.execute(OWNER, TaskListQuery(cursor=-1))


def test_cursor_mode_rejects_cursor_beyond_64_bits(list_tasks) -> None:
    with pytest.raises(ValidationError) as exc_info:
        list_tasks.execute(OWNER, TaskListQuery(cursor=str(MAX_SQL_INT + 1)))

    assert exc_info.value.code == "invalid_cursor"


def test_blank_cursor_falls_back_to_page_mode(create, list_tasks) -> None:
    create.execute(OWNER, {"title": "a"})

    result = list_tasks.execute(OWNER, TaskListQuery(cursor="  "))

    assert result.pagination.total_count == 1
    assert result.pagination.page == 1


def test_huge_page_is_capped_to_a_valid_offset(create, list_tasks) -> None:
    create.execute(OWNER, {"title": "a"})

    result = list_tasks.execute(OWNER, TaskListQuery(page="100000000000000000000", limit=10))

    assert result.tasks == []
    assert (result.pagination.page - 1) * 10 <= MAX_SQL_INT
    assert result.pagination.has_more is False


def test_status_filter_applies_to_both_modes(create, list_tasks) -> None:
    create.execute(OWNER, {"title": "a", "status": "completed"})
    create.execute(OWNER, {"title": "b"})
    create.execute(OWNER, {"title": "c", "status": "completed"})

    paged = list_tasks.execute(OWNER, TaskListQuery(status="completed"))
    cursored = list_tasks.execute(OWNER, TaskListQuery(status="completed", cursor=0))

    assert paged.pagination.total_count == 2
    assert all(t.status is TaskStatus.COMPLETED for t in paged.tasks)
    assert [t.title for t in cursored.tasks] == ["a", "c"]


def test_invalid_status_filter(list_tasks) -> None:
    with pytest.raises(ValidationError):
        list_tasks.execute(OWNER, TaskListQuery(status="done"))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 10), ("abc", 10), ("0", 1), ("-5", 1), ("50", 50), ("1000", 100)],
)
def test_normalize_limit(raw, expected) -> None:
    assert normalize_limit(raw) == expected


def test_normalize_page_and_sort() -> None:
    assert normalize_page("0") == 1
    assert normalize_page("x") == 1
    assert normalize_page("3") == 3
    assert normalize_page(str(10**20), limit=100) == MAX_SQL_INT // 100 + 1
    assert normalize_sort("password_hash; DROP", "asc") == ("created_at", SortOrder.ASC)
    assert normalize_sort("due_date", "sideways") == ("due_date", SortOrder.DESC)


def test_update_task_partial_fields(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Draft", "due_date": "2025-01-10"})
    update = UpdateTaskUseCase(tasks=task_repo, storage=storage)

    updated = update.execute(OWNER, task.id, {"status": "completed", "due_date": None})

    assert updated.status is TaskStatus.COMPLETED
    assert updated.due_date is None
    assert updated.title == "Draft"


def test_update_task_replaces_attachments(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Files"}, ["uploads/old.txt"])
    storage.files.update({"uploads/old.txt", "uploads/new.txt"})
    update = UpdateTaskUseCase(tasks=task_repo, storage=storage)

    updated = update.execute(OWNER, task.id, {}, ["uploads/new.txt"])

    assert updated.attachments == ("uploads/new.txt",)
    assert storage.deleted == ["uploads/old.txt"]


def test_failed_update_keeps_previous_attachment_files(
    create, task_repo, storage, monkeypatch
) -> None:
    task = create.execute(OWNER, {"title": "Files"}, ["uploads/old.txt"])
    storage.files.update({"uploads/old.txt", "uploads/new.txt"})
    update = UpdateTaskUseCase(tasks=task_repo, storage=storage)

    def _fail(*args, **kwargs):
        raise StorageError()

    monkeypatch.setattr(task_repo, "update", _fail)

    with pytest.raises(StorageError):
        update.execute(OWNER, task.id, {}, ["uploads/new.txt"])

    assert storage.deleted == []
    assert "uploads/old.txt" in storage.files


def test_update_task_foreign_or_missing_is_not_found(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Mine"})
    update = UpdateTaskUseCase(tasks=task_repo, storage=storage)

    with pytest.raises(TaskNotFoundError):
        update.execute(OTHER, task.id, {"title": "Stolen"})
    with pytest.raises(TaskNotFoundError):
        update.execute(OTHER, 12345, {"title": "Stolen"})
    assert task_repo.find_owned(OWNER, task.id).title == "Mine"


def test_update_task_rejects_unknown_and_empty(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Mine"})
    update = UpdateTaskUseCase(tasks=task_repo, storage=storage)

    with pytest.raises(ValidationError) as unknown:
        update.execute(OWNER, task.id, {"owner_id": OTHER})
    with pytest.raises(ValidationError) as empty:
        update.execute(OWNER, task.id, {})
    with pytest.raises(ValidationError) as blank:
        update.execute(OWNER, task.id, {"title": " "})

    assert unknown.value.code == "unknown_fields"
    assert empty.value.code == "no_changes"
    assert blank.value.code == "title_required"


def test_delete_task_removes_row_and_files(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Gone"}, ["uploads/a.png", "uploads/b.png"])
    storage.files.update({"uploads/a.png", "uploads/b.png"})

    DeleteTaskUseCase(tasks=task_repo, storage=storage).execute(OWNER, task.id)

    with pytest.raises(TaskNotFoundError):
        GetTaskUseCase(tasks=task_repo).execute(OWNER, task.id)
    assert sorted(storage.deleted) == ["uploads/a.png", "uploads/b.png"]


def test_delete_task_tolerates_missing_files(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Gone"}, ["uploads/vanished.png"])

    DeleteTaskUseCase(tasks=task_repo, storage=storage).execute(OWNER, task.id)

    assert task_repo.find_owned(OWNER, task.id) is None
    assert storage.deleted == []


def test_delete_foreign_task(create, task_repo, storage) -> None:
    task = create.execute(OWNER, {"title": "Mine"})

    with pytest.raises(TaskNotFoundError):
        DeleteTaskUseCase(tasks=task_repo, storage=storage).execute(OTHER, task.id)


def test_task_stats(create, task_repo) -> None:
    for _ in range(3):
        create.execute(OWNER, {"title": "p"})
    for _ in range(2):
        create.execute(OWNER, {"title": "c", "status": "completed"})
    create.execute(OTHER, {"title": "not mine"})

    stats = GetTaskStatsUseCase(tasks=task_repo).execute(OWNER)

    assert stats.to_dict() == {"total": 5, "pending": 3, "completed": 2}


def test_resolve_attachment(create, task_repo) -> None:
    task = create.execute(
        OWNER, {"title": "Docs"}, ["uploads/file-1-2.pdf", "uploads/attachments-3-4.png"]
    )
    resolve = ResolveAttachmentUseCase(tasks=task_repo)

    assert resolve.execute(OWNER, task.id, "attachments-3-4.png") == "uploads/attachments-3-4.png"
    assert resolve.execute(OWNER, task.id, "missing.png") is None
    assert resolve.first(OWNER, task.id) == "uploads/file-1-2.pdf"
    with pytest.raises(TaskNotFoundError):
        resolve.execute(OTHER, task.id, "file-1-2.pdf")


def test_first_attachment_requires_one(create, task_repo) -> None:
    task = create.execute(OWNER, {"title": "Bare"})

    with pytest.raises(AttachmentNotFoundError):
        ResolveAttachmentUseCase(tasks=task_repo).first(OWNER, task.id)
