from .base import (
    AppError,
    AuthError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    StorageError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthError",
    "ConflictError",
    "NotFoundError",
    "RateLimitedError",
    "StorageError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
