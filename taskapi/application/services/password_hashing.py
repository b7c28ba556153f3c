# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from taskapi.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted one-way hashing with a fixed werkzeug method string.

    ``method`` follows werkzeug's ``"<algo>:<hash>:<iterations>"`` syntax; the
    stored hash embeds it, so changing the method later keeps old hashes
    verifiable.
    """

    def __init__(self, method: str = "pbkdf2:sha256:600000") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return bool(check_password_hash(hashed, password))
