# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskapi.domain.users.entities import TokenClaims
from taskapi.domain.users.repositories import TokenService


class VerifyTokenUseCase:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str) -> TokenClaims:
        return self._tokens.verify((token or "").strip())
