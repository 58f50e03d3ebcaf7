"""Subscribers for User domain events.

Handlers run in the worker process after an event was taken off the broker.
They only log today; a handler that raises makes the worker retry the
message.
"""

import logging
from typing import TYPE_CHECKING

from user_service.domain.users.events import (
    UserCreatedEvent,
    UserEventType,
    UserUpdatedEvent,
)

if TYPE_CHECKING:
    from user_service.infrastructure.messaging import EventBus

logger = logging.getLogger(__name__)


async def handle_user_created(event: UserCreatedEvent) -> None:
    """Handle user.created."""
    logger.info(
        "user.created.received",
        extra={
            "event_id": event.event_id,
            "user_id": event.aggregate_id,
            "email": event.email,
            "user_name": event.name,
            "occurred_at": event.created_at.isoformat(),
        },
    )


async def handle_user_updated(event: UserUpdatedEvent) -> None:
    """Handle user.updated (logs each changed field)."""
    logger.info(
        "user.updated.received",
        extra={
            "event_id": event.event_id,
            "user_id": event.aggregate_id,
            "changed_fields": list(event.changes),
            "occurred_at": event.created_at.isoformat(),
        },
    )

    for field_name, change in event.changes.items():
        logger.info(
            "user.updated.field_changed",
            extra={
                "user_id": event.aggregate_id,
                "field": field_name,
                "old": change.old,
                "new": change.new,
            },
        )


def register_user_event_handlers(event_bus: "EventBus") -> None:
    """Subscribe the user handlers to their event types."""
    event_bus.subscribe(UserEventType.CREATED, handle_user_created)
    event_bus.subscribe(UserEventType.UPDATED, handle_user_updated)
