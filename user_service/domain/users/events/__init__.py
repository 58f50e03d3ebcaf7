"""Domain Events для Users bounded context."""

from .user_events import (
    USER_AGGREGATE_TYPE,
    UserCreatedEvent,
    UserEventType,
    UserUpdatedEvent,
)

__all__ = [
    "UserEventType",
    "USER_AGGREGATE_TYPE",
    "UserCreatedEvent",
    "UserUpdatedEvent",
]
