# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from taskapi.domain.users.entities import AuthResult
from taskapi.domain.users.exceptions import InvalidCredentialsError
from taskapi.domain.users.repositories import (
    LoginThrottle,
    PasswordHasher,
    TokenService,
    UserRepository,
)
from taskapi.shared.errors.base import AppError, ValidationError
from taskapi.shared.logging import logger


class AccountLockedError(AppError):
    def __init__(self, lockout_remaining: float = 0) -> None:
        super().__init__(
            code="account_locked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            message="Too many failed login attempts, try again later",
            context={"lockout_remaining_seconds": round(lockout_remaining, 1)},
        )


_UNKNOWN_USER_PASSWORD = "taskapi:no-such-account"


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
        attempts: LoginThrottle | None = None,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._attempts = attempts
        # Unknown identifiers are checked against this so every failure costs one hash.
        self._unknown_user_hash = password_hasher.hash(_UNKNOWN_USER_PASSWORD)

    def execute(
        self, identifier: str, password: str, ip_address: str | None = None
    ) -> AuthResult:
        identifier = (identifier or "").strip()
        if not identifier or not password:
            raise ValidationError(
                "missing_credentials",
                message="Email/username and password are required",
            )

        if self._attempts is not None:
            remaining = self._attempts.lockout_remaining(identifier)
            if remaining > 0:
                logger.warning(f"auth.login: locked (identifier={identifier})")
                raise AccountLockedError(lockout_remaining=remaining)

        user = self._users.find_by_identifier(identifier)
        stored_hash = user.password_hash if user is not None else self._unknown_user_hash
        password_valid = self._password_hasher.verify(password, stored_hash)

        if user is None:
            password_valid = False

        if not password_valid:
            if self._attempts is not None:
                self._attempts.record(identifier, success=False, ip_address=ip_address)
            logger.info(f"auth.login: err (identifier={identifier})")
            raise InvalidCredentialsError()

        if self._attempts is not None:
            self._attempts.record(identifier, success=True, ip_address=ip_address)

        token = self._tokens.issue(user.id)
        logger.info(f"auth.login: ok (user_id={user.id})")
        return AuthResult(user=user, token=token)
