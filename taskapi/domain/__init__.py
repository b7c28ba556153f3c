# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .tasks.entities import NewTask, Task, TaskStats, TaskStatus
from .users.entities import AuthResult, TokenClaims, User

__all__ = [
    "AuthResult",
    "NewTask",
    "Task",
    "TaskStats",
    "TaskStatus",
    "TokenClaims",
    "User",
]
