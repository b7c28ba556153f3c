# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from taskapi.domain.users.entities import PROFILE_FIELDS, User
from taskapi.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from taskapi.domain.users.repositories import PasswordHasher, UserRepository
from taskapi.shared.errors.base import ValidationError
from taskapi.shared.logging import logger

from .register_user import validate_password


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, owner_id: int, fields: Mapping[str, Any]) -> User:
        unknown = sorted(set(fields) - PROFILE_FIELDS)
        if unknown:
            raise ValidationError(
                "unknown_fields",
                message=f"Unknown fields: {', '.join(unknown)}",
                context={"fields": unknown},
            )
        if not fields:
            raise ValidationError("no_changes", message="No fields to update")

        if self._users.find_by_id(owner_id) is None:
            raise UserNotFoundError()

        changes: dict[str, Any] = {}
        for name in ("username", "email"):
            if name in fields:
                value = str(fields[name] or "").strip()
                if not value:
                    raise ValidationError(
                        f"{name}_required", message=f"{name.capitalize()} cannot be empty"
                    )
                changes[name] = value
        if "password" in fields:
            password = validate_password(str(fields["password"] or ""))
            changes["password_hash"] = self._password_hasher.hash(password)

        if "username" in changes or "email" in changes:
            conflict = self._users.find_conflicting(
                user_id=owner_id,
                username=changes.get("username"),
                email=changes.get("email"),
            )
            if conflict is not None:
                raise UserAlreadyExistsError()

        updated = self._users.update(owner_id, changes)
        if updated is None:
            raise UserNotFoundError()
        logger.info(
            f"auth.profile_update: ok (user_id={owner_id} fields={sorted(fields)})"
        )
        return updated
