# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateTaskRequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    due_date: str | None = None
    status: str | None = None


class UpdateTaskRequestDTO(BaseModel):
    """Partial update; only the fields actually sent are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    due_date: str | None = None
    status: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ListTasksQueryDTO(BaseModel):
    """Raw query-string options; normalization happens in the use case."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    limit: str | None = None
    cursor: str | None = None
    status: str | None = None
    page: str | None = None
    sort_by: str | None = Field(default=None, alias="sortBy")
    sort_order: str | None = Field(default=None, alias="sortOrder")
