"""CeleryEventPublisher - publishes domain events through the Celery broker.

Кожен event type має свою queue (settings.event_queues); the worker consumes
them with a single task that parses the message and dispatches it to the
EventBus.
"""

import asyncio
import logging

from celery import Celery
from kombu.exceptions import KombuError

from user_service.application.shared import EventPublisher, EventPublishError
from user_service.config import Settings
from user_service.domain.shared import DomainEvent

logger = logging.getLogger(__name__)

# Task consumed by presentation.workers.tasks.user_event_tasks
EVENT_TASK_NAME = "user_service.events.handle_user_event"


def create_producer_app(settings: Settings) -> Celery:
    """Celery app used only for sending (no tasks registered)."""
    app = Celery("user_service_producer", broker=settings.celery_broker_url)
    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        timezone="UTC",
        enable_utc=True,
        broker_connection_retry_on_startup=True,
    )
    return app


class CeleryEventPublisher(EventPublisher):
    """EventPublisher over Celery send_task.

    send_task is blocking (kombu), so it runs in a worker thread to keep the
    event loop free. No retry here: a broker failure surfaces as
    EventPublishError.

    Example:
        >>> publisher = CeleryEventPublisher(
        ...     celery_app=create_producer_app(settings),
        ...     queues=settings.event_queues,
        ... )
        >>> await publisher.publish(event)
    """

    def __init__(self, celery_app: Celery, queues: dict[str, str]) -> None:
        """Initialize publisher.

        Args:
            celery_app: Celery app bound to the broker.
            queues: Map event_type → queue name.
        """
        self._celery_app = celery_app
        self._queues = queues

    async def publish(self, event: DomainEvent) -> None:
        """Send event JSON to its queue.

        Raises:
            EventPublishError: No queue for the event type, or broker failure.
        """
        queue = self._queues.get(event.event_type)
        if queue is None:
            raise EventPublishError(
                f"No queue configured for event type {event.event_type}", event
            )

        message = event.to_message()

        try:
            await asyncio.to_thread(
                self._celery_app.send_task,
                EVENT_TASK_NAME,
                args=[message],
                queue=queue,
                headers={
                    "event_type": event.event_type,
                    "event_id": event.event_id,
                },
            )
        except (KombuError, OSError) as e:
            logger.error(
                "event_publisher.publish_failed",
                extra={
                    "event_type": event.event_type,
                    "event_id": event.event_id,
                    "queue": queue,
                    "error": str(e),
                },
            )
            raise EventPublishError("Failed to publish event", event, queue=queue) from e

        logger.debug(
            "event_publisher.sent",
            extra={"event_type": event.event_type, "event_id": event.event_id, "queue": queue},
        )
