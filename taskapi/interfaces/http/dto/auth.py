# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=128)


class LoginRequestDTO(BaseModel):
    """Accepts ``identifier`` or either of ``username``/``email``."""

    identifier: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    @model_validator(mode="after")
    def _require_identifier(self) -> "LoginRequestDTO":
        if not self.login_identifier:
            raise PydanticCustomError(
                "missing", "Username or email is required", {}
            )
        return self

    @property
    def login_identifier(self) -> str:
        return self.identifier or self.username or self.email or ""


class UpdateProfileRequestDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str | None = Field(default=None, min_length=1, max_length=64)
    email: str | None = Field(
        default=None, min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$"
    )
    password: str | None = Field(default=None, min_length=6, max_length=128)
