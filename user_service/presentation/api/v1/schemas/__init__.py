"""API v1 schemas."""

from .user_schemas import (
    CreateUserRequest,
    ErrorResponse,
    PaginatedUserResponse,
    PatchUserRequest,
    UserResponse,
    ValidationErrorDetail,
)

__all__ = [
    "CreateUserRequest",
    "PatchUserRequest",
    "UserResponse",
    "PaginatedUserResponse",
    "ErrorResponse",
    "ValidationErrorDetail",
]
