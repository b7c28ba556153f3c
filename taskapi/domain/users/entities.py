# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

MIN_PASSWORD_LENGTH = 6

PROFILE_FIELDS = frozenset({"username", "email", "password"})


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def public(self) -> dict[str, Any]:
        """User representation safe to return to callers (no password hash)."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(slots=True, frozen=True)
class TokenClaims:

    owner_id: int
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class AuthResult:

    user: User
    token: str
