# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.users.repositories import TokenService
from taskapi.shared.logging import logger


class RefreshTokenUseCase:
    """Mint a fresh token; earlier tokens stay valid until they expire."""

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, owner_id: int) -> str:
        token = self._tokens.issue(owner_id)
        logger.debug(f"auth.refresh: ok (user_id={owner_id})")
        return token
