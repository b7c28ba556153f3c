# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import g, request

from taskapi.application.use_cases.users.get_profile import GetProfileUseCase
from taskapi.application.use_cases.users.verify_token import VerifyTokenUseCase
from taskapi.domain.users.exceptions import UserNotFoundError
from taskapi.shared.errors import AuthError
from taskapi.shared.logging import logger
from taskapi.shared.middleware.request_logger import client_ip


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header:
        raise AuthError("missing_token", message="Access denied. No token provided.")
    if not header.startswith("Bearer "):
        raise AuthError(
            "invalid_token_format", message="Invalid token format. Use Bearer <token>"
        )
    token = header[7:].strip()
    if not token:
        raise AuthError("missing_token", message="Access denied. No token provided.")
    return token


class BearerAuth:
    """Resolves the caller identity from an ``Authorization: Bearer`` header."""

    def __init__(
        self,
        *,
        verify_token: VerifyTokenUseCase,
        get_profile: GetProfileUseCase,
    ) -> None:
        self._verify_token = verify_token
        self._get_profile = get_profile

    def authenticate(self) -> int:
        try:
            token = bearer_token()
            claims = self._verify_token.execute(token)
        except AuthError as exc:
            logger.warning(
                f"auth: rejected ({exc.code}) on {request.method} {request.path} "
                f"from {client_ip()}"
            )
            raise

        try:
            self._get_profile.execute(claims.owner_id)
        except UserNotFoundError:
            logger.warning(f"auth: token valid but user {claims.owner_id} no longer exists")
            raise AuthError(
                "user_not_found", message="Token is valid but user no longer exists."
            ) from None
        return claims.owner_id

    def required(self, f: Callable) -> Callable:
        """Wrap a view so it receives the caller as ``owner_id``."""

        @wraps(f)
        def inner(*args, **kwargs):
            owner_id = self.authenticate()
            g.user_id = owner_id
            return f(*args, owner_id=owner_id, **kwargs)

        return inner
