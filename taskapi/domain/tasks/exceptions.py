# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.shared.errors.base import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: int | str | None = None) -> None:
        context = {"task_id": task_id} if task_id is not None else None
        super().__init__("task_not_found", message="Task not found", context=context)


class AttachmentNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("attachment_not_found", message="No such file attached to this task")


class InvalidStatusError(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(
            "invalid_status",
            message='Status must be either "pending" or "completed"',
            context={"status": str(value)},
        )


class InvalidDueDateError(ValidationError):
    def __init__(self, value: object) -> None:
        super().__init__(
            "invalid_due_date",
            message="Invalid due date format",
            context={"due_date": str(value)},
        )


class EmptyTitleError(ValidationError):
    def __init__(self) -> None:
        super().__init__("title_required", message="Task title is required")
