# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from taskapi.application.services.password_hashing import WerkzeugPasswordHasher
from taskapi.application.use_cases.tasks.create_task import CreateTaskUseCase
from taskapi.application.use_cases.tasks.delete_task import DeleteTaskUseCase
from taskapi.application.use_cases.tasks.get_task import GetTaskUseCase
from taskapi.application.use_cases.tasks.get_task_stats import GetTaskStatsUseCase
from taskapi.application.use_cases.tasks.list_tasks import ListTasksUseCase
from taskapi.application.use_cases.tasks.resolve_attachment import ResolveAttachmentUseCase
from taskapi.application.use_cases.tasks.update_task import UpdateTaskUseCase
from taskapi.application.use_cases.users.delete_account import DeleteAccountUseCase
from taskapi.application.use_cases.users.get_profile import GetProfileUseCase
from taskapi.application.use_cases.users.login_user import LoginUserUseCase
from taskapi.application.use_cases.users.refresh_token import RefreshTokenUseCase
from taskapi.application.use_cases.users.register_user import RegisterUserUseCase
from taskapi.application.use_cases.users.update_profile import UpdateProfileUseCase
from taskapi.application.use_cases.users.verify_token import VerifyTokenUseCase
from taskapi.infrastructure.auth.jwt_tokens import JwtTokenService
from taskapi.infrastructure.auth.login_attempts import LoginAttemptsTracker
from taskapi.infrastructure.db import SessionLocal
from taskapi.infrastructure.repositories.tasks.sqlalchemy_task_repository import (
    SqlAlchemyTaskRepository,
)
from taskapi.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from taskapi.infrastructure.storage import LocalAttachmentStorage
from taskapi.interfaces.http.auth import BearerAuth
from taskapi.interfaces.http.controllers.auth_controller import AuthController
from taskapi.interfaces.http.controllers.misc_controller import MiscController
from taskapi.interfaces.http.controllers.task_controller import TaskController
from taskapi.interfaces.http.uploads import UploadPolicy
from taskapi.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    # Primitives

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self._config.security.password_hash_method)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self._config.secret_key,
            algorithm=self._config.tokens.algorithm,
            expires_in=self._config.tokens.expires_in,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        return LoginAttemptsTracker(
            max_attempts=self._config.security.login_max_attempts,
            lockout_seconds=self._config.security.login_lockout_seconds,
        )

    @cached_property
    def attachment_storage(self) -> LocalAttachmentStorage:
        return LocalAttachmentStorage(self._config.uploads.directory)

    @cached_property
    def upload_policy(self) -> UploadPolicy:
        return UploadPolicy(self._config.uploads, self.attachment_storage)

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(SessionLocal)

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
            attempts=self.login_attempts,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(tokens=self.token_service)

    @cached_property
    def refresh_token_use_case(self) -> RefreshTokenUseCase:
        return RefreshTokenUseCase(tokens=self.token_service)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(
            users=self.user_repository, password_hasher=self.password_hasher
        )

    @cached_property
    def delete_account_use_case(self) -> DeleteAccountUseCase:
        return DeleteAccountUseCase(
            users=self.user_repository,
            tasks=self.task_repository,
            storage=self.attachment_storage,
        )

    # Task use cases

    @cached_property
    def create_task_use_case(self) -> CreateTaskUseCase:
        return CreateTaskUseCase(tasks=self.task_repository)

    @cached_property
    def get_task_use_case(self) -> GetTaskUseCase:
        return GetTaskUseCase(tasks=self.task_repository)

    @cached_property
    def list_tasks_use_case(self) -> ListTasksUseCase:
        return ListTasksUseCase(tasks=self.task_repository)

    @cached_property
    def update_task_use_case(self) -> UpdateTaskUseCase:
        return UpdateTaskUseCase(tasks=self.task_repository, storage=self.attachment_storage)

    @cached_property
    def delete_task_use_case(self) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(tasks=self.task_repository, storage=self.attachment_storage)

    @cached_property
    def task_stats_use_case(self) -> GetTaskStatsUseCase:
        return GetTaskStatsUseCase(tasks=self.task_repository)

    @cached_property
    def resolve_attachment_use_case(self) -> ResolveAttachmentUseCase:
        return ResolveAttachmentUseCase(tasks=self.task_repository)

    # HTTP

    @cached_property
    def bearer_auth(self) -> BearerAuth:
        return BearerAuth(
            verify_token=self.verify_token_use_case,
            get_profile=self.get_profile_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            auth=self.bearer_auth,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            get_profile_use_case=self.get_profile_use_case,
            update_profile_use_case=self.update_profile_use_case,
            delete_account_use_case=self.delete_account_use_case,
            refresh_token_use_case=self.refresh_token_use_case,
        )

    @cached_property
    def task_controller(self) -> TaskController:
        return TaskController(
            auth=self.bearer_auth,
            uploads=self.upload_policy,
            storage=self.attachment_storage,
            create_task_use_case=self.create_task_use_case,
            get_task_use_case=self.get_task_use_case,
            list_tasks_use_case=self.list_tasks_use_case,
            update_task_use_case=self.update_task_use_case,
            delete_task_use_case=self.delete_task_use_case,
            task_stats_use_case=self.task_stats_use_case,
            resolve_attachment_use_case=self.resolve_attachment_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
