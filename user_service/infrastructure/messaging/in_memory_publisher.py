"""InMemoryEventPublisher - records events and dispatches them in-process.

Used for development (EVENT_PUBLISHER_BACKEND=memory) and tests. Every event
goes through the same wire round trip as the broker path
(to_message → parse_event) before reaching the EventBus.
"""

import logging

from user_service.application.shared import EventPublisher
from user_service.domain.shared import DomainEvent

from .event_bus import EventBus
from .serialization import parse_event

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """EventPublisher that keeps published events in a list.

    Example:
        >>> publisher = InMemoryEventPublisher()
        >>> await service.create_user(email="jane@x.com", name="Jane")
        >>> publisher.published[0].event_type
        'user.created'
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize publisher.

        Args:
            event_bus: Optional bus to deliver events to (handler failures
                are logged, never raised to the publisher caller).
        """
        self.published: list[DomainEvent] = []
        self._event_bus = event_bus

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        logger.debug(
            "event_publisher.recorded",
            extra={"event_type": event.event_type, "event_id": event.event_id},
        )

        if self._event_bus is not None:
            await self._event_bus.publish(parse_event(event.to_message()))

    def events_of_type(self, event_type: str) -> list[DomainEvent]:
        """Get recorded events with the given wire type."""
        return [e for e in self.published if e.event_type == event_type]

    def clear(self) -> None:
        """Forget recorded events."""
        self.published.clear()
