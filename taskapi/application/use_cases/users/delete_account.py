# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.application.services.attachments import discard_attachments
from taskapi.domain.tasks.repositories import AttachmentStorage, TaskRepository
from taskapi.domain.users.exceptions import UserNotFoundError
from taskapi.domain.users.repositories import UserRepository
from taskapi.shared.logging import logger


class DeleteAccountUseCase:
    """Hard-delete a user; tasks go with the row, their files are released."""

    def __init__(
        self,
        *,
        users: UserRepository,
        tasks: TaskRepository,
        storage: AttachmentStorage,
    ) -> None:
        self._users = users
        self._tasks = tasks
        self._storage = storage

    def execute(self, owner_id: int) -> None:
        if self._users.find_by_id(owner_id) is None:
            raise UserNotFoundError()

        paths = self._tasks.attachments_for_owner(owner_id)
        if not self._users.delete(owner_id):
            raise UserNotFoundError()

        removed = discard_attachments(self._storage, paths)
        logger.info(f"auth.delete_account: ok (user_id={owner_id} files_removed={removed})")
