"""Users application layer - use cases and event subscribers."""

from .event_handlers import (
    handle_user_created,
    handle_user_updated,
    register_user_event_handlers,
)
from .user_service import UserService

__all__ = [
    "UserService",
    "handle_user_created",
    "handle_user_updated",
    "register_user_event_handlers",
]
