# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from taskapi.domain.users.entities import MIN_PASSWORD_LENGTH, AuthResult, User
from taskapi.domain.users.exceptions import UserAlreadyExistsError
from taskapi.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from taskapi.shared.errors.base import ValidationError
from taskapi.shared.logging import logger


def validate_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "password_too_short",
            message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    return password


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> AuthResult:
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError(
                "missing_fields",
                message="Username, email, and password are required",
            )
        validate_password(password)

        if self._users.exists_with(username=username, email=email):
            logger.info(f"auth.register: err (duplicate username={username})")
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            username=username,
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted.id)
        logger.info(f"auth.register: ok (user_id={persisted.id})")
        return AuthResult(user=persisted, token=token)
