"""User Event Celery Tasks.

Тонка обгортка: parse wire message → domain event → EventBus.dispatch.

Architecture:
    Broker queue (user-created | user-updated)
        → handle_user_event task
        → parse_event (pydantic schemas)
        → EventBus → handle_user_created / handle_user_updated
"""

import asyncio
import logging
from functools import wraps
from typing import Any

from celery import shared_task
from celery.exceptions import Reject

from user_service.config import bind_event_context, clear_request_context, get_settings
from user_service.infrastructure.messaging import (
    EVENT_TASK_NAME,
    EventBus,
    InvalidEventMessage,
    get_event_bus,
    parse_event,
)

logger = logging.getLogger(__name__)

settings = get_settings()

# Retry delay cap (seconds) for exponential backoff
MAX_RETRY_BACKOFF = 300


def async_task(f):
    """Decorator to run async function in Celery task."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            return loop.run_until_complete(f(*args, **kwargs))
        finally:
            loop.close()
    return wrapper


def retry_countdown(retries: int) -> int:
    """Exponential backoff: 1, 2, 4, ... seconds, capped."""
    return min(2 ** retries, MAX_RETRY_BACKOFF)


async def process_event_message(
    message: dict[str, Any], event_bus: EventBus | None = None
) -> dict[str, Any]:
    """Parse one message and dispatch it.

    Args:
        message: Wire message (camelCase dict).
        event_bus: Bus to dispatch to (default: get_event_bus()).

    Returns:
        Dict with processing result.

    Raises:
        InvalidEventMessage: Message failed validation.
        Exception: Whatever a handler raised.
    """
    event = parse_event(message)
    bus = event_bus or get_event_bus()

    await bus.dispatch(event)

    return {
        "status": "processed",
        "event_type": event.event_type,
        "event_id": event.event_id,
    }


@shared_task(
    bind=True,
    name=EVENT_TASK_NAME,
    max_retries=settings.celery_task_max_retries,
    acks_late=True,
)
@async_task
async def handle_user_event(self, message: dict[str, Any]) -> dict[str, Any]:
    """Consume one user event message.

    Invalid message → Reject(requeue=False), no retry.
    Handler failure → retry with exponential backoff.

    Example:
        >>> celery_app.send_task(EVENT_TASK_NAME, args=[event.to_message()], queue="user-created")
    """
    envelope = message if isinstance(message, dict) else {}
    bind_event_context(
        event_id=envelope.get("eventId"),
        event_type=envelope.get("eventType"),
        task_id=self.request.id,
        retries=self.request.retries,
    )

    try:
        return await process_event_message(message)
    except InvalidEventMessage as e:
        logger.error("user_event.rejected", extra={"errors": e.errors})
        raise Reject(e.message, requeue=False) from e
    except Exception as e:
        logger.warning(
            "user_event.handler_failed",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise self.retry(exc=e, countdown=retry_countdown(self.request.retries))
    finally:
        clear_request_context()
