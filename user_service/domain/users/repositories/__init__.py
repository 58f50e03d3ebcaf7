"""Repository ports (interfaces) для Users bounded context."""

from .user_repository import (
    NoFieldsToUpdate,
    PartialUpdateResult,
    TContext,
    UserRepository,
    UserUpdated,
)

__all__ = [
    "UserRepository",
    "TContext",
    "PartialUpdateResult",
    "UserUpdated",
    "NoFieldsToUpdate",
]
