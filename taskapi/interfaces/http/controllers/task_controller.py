# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os
from typing import Any

from flask import Blueprint, Response, request, send_file
from pydantic import ValidationError

from taskapi.application.use_cases.tasks.create_task import CreateTaskUseCase
from taskapi.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from taskapi.application.use_cases.tasks.get_task import GetTaskUseCase
from taskapi.application.use_cases.tasks.get_task_stats import GetTaskStatsUseCase
from taskapi.application.use_cases.tasks.list_tasks import ListTasksUseCase
from taskapi.application.use_cases.tasks.resolve_attachment import ResolveAttachmentUseCase
from taskapi.application.use_cases.tasks.update_task import UpdateTaskUseCase
from taskapi.domain.tasks.entities import TaskListQuery
from taskapi.domain.tasks.exceptions import AttachmentNotFoundError
from taskapi.infrastructure.storage import LocalAttachmentStorage
from taskapi.interfaces.http.auth import BearerAuth
from taskapi.interfaces.http.dto.tasks import (
    CreateTaskRequestDTO,
    ListTasksQueryDTO,
    UpdateTaskRequestDTO,
)
from taskapi.interfaces.http.responses import success
from taskapi.interfaces.http.uploads import UploadPolicy
from taskapi.shared.errors.validation import raise_validation_error


def _request_fields() -> dict[str, Any]:
    if request.is_json:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}
    return request.form.to_dict()


class TaskController:
    def __init__(
        self,
        *,
        auth: BearerAuth,
        uploads: UploadPolicy,
        storage: LocalAttachmentStorage,
        create_task_use_case: CreateTaskUseCase,
        get_task_use_case: GetTaskUseCase,
        list_tasks_use_case: ListTasksUseCase,
        update_task_use_case: UpdateTaskUseCase,
        delete_task_use_case: DeleteTaskUseCase,
        task_stats_use_case: GetTaskStatsUseCase,
        resolve_attachment_use_case: ResolveAttachmentUseCase,
    ) -> None:
        self._auth = auth
        self._uploads = uploads
        self._storage = storage
        self._create_task_use_case = create_task_use_case
        self._get_task_use_case = get_task_use_case
        self._list_tasks_use_case = list_tasks_use_case
        self._update_task_use_case = update_task_use_case
        self._delete_task_use_case = delete_task_use_case
        self._task_stats_use_case = task_stats_use_case
        self._resolve_attachment_use_case = resolve_attachment_use_case

    def create(self, owner_id: int) -> tuple[Response, int]:
        try:
            dto = CreateTaskRequestDTO.model_validate(_request_fields())
        except ValidationError as exc:
            raise_validation_error(exc)

        with self._uploads.stored() as uploaded:
            task = self._create_task_use_case.execute(
                owner_id,
                dto.model_dump(exclude_unset=True),
                [item.path for item in uploaded],
            )
        return success("Task created successfully", {"task": task.to_dict()}, 201)

    def list_tasks(self, owner_id: int) -> tuple[Response, int]:
        try:
            dto = ListTasksQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._list_tasks_use_case.execute(
            owner_id,
            TaskListQuery(
                limit=dto.limit,
                cursor=dto.cursor,
                status=dto.status,
                page=dto.page,
                sort_by=dto.sort_by,
                sort_order=dto.sort_order,
            ),
        )
        return success("Tasks retrieved successfully", result.to_dict())

    def stats(self, owner_id: int) -> tuple[Response, int]:
        stats = self._task_stats_use_case.execute(owner_id)
        return success("Task statistics retrieved successfully", {"stats": stats.to_dict()})

    def get(self, owner_id: int, task_id: int) -> tuple[Response, int]:
        task = self._get_task_use_case.execute(owner_id, task_id)
        return success("Task retrieved successfully", {"task": task.to_dict()})

    def update(self, owner_id: int, task_id: int) -> tuple[Response, int]:
        try:
            dto = UpdateTaskRequestDTO.model_validate(_request_fields())
        except ValidationError as exc:
            raise_validation_error(exc)

        with self._uploads.stored() as uploaded:
            task = self._update_task_use_case.execute(
                owner_id,
                task_id,
                dto.changes(),
                [item.path for item in uploaded] or None,
            )
        return success("Task updated successfully", {"task": task.to_dict()})

    def delete(self, owner_id: int, task_id: int) -> tuple[Response, int]:
        self._delete_task_use_case.execute(owner_id, task_id)
        return success("Task deleted successfully")

    def download(self, owner_id: int, task_id: int) -> Response:
        path = self._resolve_attachment_use_case.first(owner_id, task_id)
        return self._send(path)

    def attachment(self, owner_id: int, task_id: int, filename: str) -> Response:
        path = self._resolve_attachment_use_case.execute(owner_id, task_id, filename)
        if path is None:
            raise AttachmentNotFoundError()
        return self._send(path)

    def _send(self, path: str) -> Response:
        try:
            file_path = self._storage.resolve(path)
        except ValueError:
            raise AttachmentNotFoundError() from None
        if not file_path.is_file():
            raise AttachmentNotFoundError()
        return send_file(file_path, as_attachment=True, download_name=os.path.basename(path))

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")
        required = self._auth.required
        bp.add_url_rule("", endpoint="create", view_func=required(self.create), methods=["POST"])
        bp.add_url_rule("", endpoint="list", view_func=required(self.list_tasks), methods=["GET"])
        bp.add_url_rule("/stats", endpoint="stats", view_func=required(self.stats), methods=["GET"])
        bp.add_url_rule(
            "/<int:task_id>", endpoint="get", view_func=required(self.get), methods=["GET"]
        )
        bp.add_url_rule(
            "/<int:task_id>",
            endpoint="update",
            view_func=required(self.update),
            methods=["PUT", "PATCH"],
        )
        bp.add_url_rule(
            "/<int:task_id>",
            endpoint="delete",
            view_func=required(self.delete),
            methods=["DELETE"],
        )
        bp.add_url_rule(
            "/<int:task_id>/download",
            endpoint="download",
            view_func=required(self.download),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/<int:task_id>/attachments/<path:filename>",
            endpoint="attachment",
            view_func=required(self.attachment),
            methods=["GET"],
        )
        return bp
