# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .entities import TokenClaims, User


class UserRepository(Protocol):
    def find_by_identifier(self, identifier: str) -> User | None: ...
    def exists_with(self, *, username: str, email: str) -> bool: ...
    def find_conflicting(
        self, *, user_id: int, username: str | None, email: str | None
    ) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None: ...
    def delete(self, user_id: int) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: int) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class LoginThrottle(Protocol):
    def record(self, identifier: str, success: bool, ip_address: str | None = None) -> None: ...
    def lockout_remaining(self, identifier: str) -> float: ...
