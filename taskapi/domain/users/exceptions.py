# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.shared.errors.base import AuthError, ConflictError, NotFoundError


class UserAlreadyExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            "user_already_exists",
            message="User with this email or username already exists",
        )


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid_credentials", message="Invalid credentials")


class InvalidTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("invalid_token", message="Invalid token")


class TokenExpiredError(AuthError):
    def __init__(self) -> None:
        super().__init__("token_expired", message="Token has expired, please login again")


class UserNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("user_not_found", message="User not found")
