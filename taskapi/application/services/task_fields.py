# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-field validators shared by task creation and partial updates."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from taskapi.domain.tasks.entities import TASK_FIELDS, TaskStatus
from taskapi.domain.tasks.exceptions import (
    EmptyTitleError,
    InvalidDueDateError,
    InvalidStatusError,
)
from taskapi.shared.errors.base import ValidationError


def clean_title(value: Any) -> str:
    title = str(value).strip() if value is not None else ""
    if not title:
        raise EmptyTitleError()
    return title


def clean_description(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def clean_status(value: Any) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidStatusError(value) from None


def clean_optional_status(value: Any) -> TaskStatus | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return clean_status(value)


def clean_due_date(value: Any) -> date | None:
    """Parse ``YYYY-MM-DD`` (or an ISO datetime, truncated); blank clears."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidDueDateError(value) from None


_CLEANERS = {
    "title": clean_title,
    "description": clean_description,
    "due_date": clean_due_date,
    "status": clean_status,
}


def clean_task_changes(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a partial update against the closed set of task fields."""
    unknown = sorted(set(fields) - TASK_FIELDS)
    if unknown:
        raise ValidationError(
            "unknown_fields",
            message=f"Unknown fields: {', '.join(unknown)}",
            context={"fields": unknown},
        )
    return {name: _CLEANERS[name](value) for name, value in fields.items()}
