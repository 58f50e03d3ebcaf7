"""Event publisher selection from Settings."""

from user_service.application.shared import EventPublisher
from user_service.config import Settings

from .celery_publisher import CeleryEventPublisher, create_producer_app
from .event_bus import get_event_bus
from .in_memory_publisher import InMemoryEventPublisher


def create_event_publisher(settings: Settings) -> EventPublisher:
    """Build the publisher named by settings.event_publisher_backend.

    - "celery": broker-backed, one queue per event type
    - "memory": in-process, dispatches to the default EventBus
    """
    if settings.event_publisher_backend == "memory":
        return InMemoryEventPublisher(event_bus=get_event_bus())

    return CeleryEventPublisher(
        celery_app=create_producer_app(settings),
        queues=settings.event_queues,
    )
