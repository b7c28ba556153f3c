# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, request
from pydantic import ValidationError

from taskapi.application.use_cases.users.delete_account import DeleteAccountUseCase
from taskapi.application.use_cases.users.get_profile import GetProfileUseCase
from taskapi.application.use_cases.users.login_user import LoginUserUseCase
from taskapi.application.use_cases.users.refresh_token import RefreshTokenUseCase
from taskapi.application.use_cases.users.register_user import RegisterUserUseCase
from taskapi.application.use_cases.users.update_profile import UpdateProfileUseCase
from taskapi.interfaces.http.auth import BearerAuth
from taskapi.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    UpdateProfileRequestDTO,
)
from taskapi.interfaces.http.responses import success
from taskapi.shared.errors.validation import raise_validation_error
from taskapi.shared.middleware.rate_limit import rate_limit
from taskapi.shared.middleware.request_logger import client_ip


class AuthController:
    def __init__(
        self,
        *,
        auth: BearerAuth,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        delete_account_use_case: DeleteAccountUseCase,
        refresh_token_use_case: RefreshTokenUseCase,
    ) -> None:
        self._auth = auth
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._get_profile_use_case = get_profile_use_case
        self._update_profile_use_case = update_profile_use_case
        self._delete_account_use_case = delete_account_use_case
        self._refresh_token_use_case = refresh_token_use_case

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._register_use_case.execute(dto.username, dto.email, dto.password)
        return success(
            "User registered successfully",
            {"user": result.user.public(), "token": result.token},
            201,
        )

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(
            dto.login_identifier, dto.password, client_ip()
        )
        return success(
            "Login successful", {"user": result.user.public(), "token": result.token}
        )

    def profile(self, owner_id: int) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(owner_id)
        return success("Profile retrieved successfully", {"user": user.public()})

    def update_profile(self, owner_id: int) -> tuple[Response, int]:
        try:
            dto = UpdateProfileRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._update_profile_use_case.execute(
            owner_id, dto.model_dump(exclude_unset=True)
        )
        return success("Profile updated successfully", {"user": user.public()})

    def delete_account(self, owner_id: int) -> tuple[Response, int]:
        self._delete_account_use_case.execute(owner_id)
        return success("Account deleted successfully")

    def refresh_token(self, owner_id: int) -> tuple[Response, int]:
        token = self._refresh_token_use_case.execute(owner_id)
        return success("Token refreshed successfully", {"token": token})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        required = self._auth.required
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/profile", view_func=required(self.profile), methods=["GET"])
        bp.add_url_rule(
            "/profile",
            endpoint="update_profile",
            view_func=required(self.update_profile),
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/account", view_func=required(self.delete_account), methods=["DELETE"]
        )
        bp.add_url_rule(
            "/refresh-token", view_func=required(self.refresh_token), methods=["POST"]
        )
        return bp
