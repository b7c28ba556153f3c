# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.users.entities import User
from taskapi.domain.users.exceptions import UserNotFoundError
from taskapi.domain.users.repositories import UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, owner_id: int) -> User:
        user = self._users.find_by_id(owner_id)
        if user is None:
            raise UserNotFoundError()
        return user
