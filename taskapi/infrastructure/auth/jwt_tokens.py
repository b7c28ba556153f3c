# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless bearer tokens signed with the server secret."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

import jwt

from taskapi.domain.users.entities import TokenClaims
from taskapi.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from taskapi.domain.users.repositories import TokenService


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        expires_in: int = 3600,
        clock=None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(seconds=expires_in)
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, user_id: int) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError() from None
        except jwt.InvalidTokenError:
            raise InvalidTokenError() from None

        try:
            owner_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError() from None

        return TokenClaims(
            owner_id=owner_id,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
