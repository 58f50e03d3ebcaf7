"""Domain services для Users bounded context."""

from .user_changes import generate_user_changes, normalize_value
from .validators import (
    validate_create_user_request,
    validate_delete_user_request,
    validate_email_not_duplicate,
    validate_name,
    validate_patch_user_request,
    validate_user_exists,
)

__all__ = [
    "generate_user_changes",
    "normalize_value",
    "validate_name",
    "validate_email_not_duplicate",
    "validate_user_exists",
    "validate_create_user_request",
    "validate_patch_user_request",
    "validate_delete_user_request",
]
