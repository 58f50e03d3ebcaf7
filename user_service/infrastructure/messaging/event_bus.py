"""Event Bus - registry of domain event handlers.

Event Bus enables event-driven architecture:
- UserService publishes events (user.created, user.updated) after commit
- Workers (або in-memory publisher) dispatch them to subscribed handlers
- Decoupling: domain не знає про subscribers
"""

import logging
from collections import defaultdict
from typing import Awaitable, Callable

from user_service.domain.shared import DomainEvent

logger = logging.getLogger(__name__)

# Event handler signature: async function that takes DomainEvent
EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    """Event Bus для domain events, keyed by wire event type.

    Two delivery modes:
    - dispatch(): handler errors propagate (worker path, so Celery can retry)
    - publish(): handler errors are logged and the next handler still runs

    Example:
        >>> event_bus = EventBus()
        >>> event_bus.subscribe(UserEventType.CREATED, handle_user_created)

        >>> event = UserCreatedEvent(user.id, email=user.email, name=user.name)
        >>> await event_bus.dispatch(event)
        >>> # user.created → handle_user_created(event)
    """

    def __init__(self) -> None:
        """Initialize event bus."""
        # Map: event_type ("user.created") → list of handlers
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)
        logger.debug("event_bus.initialized")

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe handler to event type.

        Args:
            event_type: Wire event type (e.g., "user.created").
            handler: Async function to call for each event of that type.
        """
        self._subscribers[event_type].append(handler)
        logger.debug(
            "event_bus.subscription_added",
            extra={"event_type": event_type, "handler": handler.__name__},
        )

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Unsubscribe handler from event type."""
        if handler in self._subscribers[event_type]:
            self._subscribers[event_type].remove(handler)
            logger.debug(
                "event_bus.subscription_removed",
                extra={"event_type": event_type, "handler": handler.__name__},
            )

    def has_subscribers(self, event_type: str) -> bool:
        return bool(self._subscribers.get(event_type))

    async def dispatch(self, event: DomainEvent) -> None:
        """Deliver event to every handler, stopping at the first failure.

        Args:
            event: Domain event to deliver.

        Raises:
            Exception: Whatever the failing handler raised.
        """
        handlers = self._subscribers.get(event.event_type, [])

        if not handlers:
            logger.warning(
                "event_bus.no_subscribers",
                extra={"event_type": event.event_type, "event_id": event.event_id},
            )
            return

        logger.info(
            "event_bus.dispatching",
            extra={
                "event_type": event.event_type,
                "handlers_count": len(handlers),
                "event_id": event.event_id,
            },
        )

        for handler in handlers:
            await handler(event)

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every handler, isolating handler failures.

        Args:
            event: Domain event to deliver.
        """
        for handler in self._subscribers.get(event.event_type, []):
            try:
                await handler(event)
            except Exception as e:
                # Log error but continue with other handlers
                logger.error(
                    "event_bus.handler_failed",
                    extra={
                        "event_type": event.event_type,
                        "handler": handler.__name__,
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def clear_subscribers(self) -> None:
        """Remove every subscription."""
        self._subscribers.clear()

    def get_subscribers_count(self, event_type: str) -> int:
        """Get number of subscribers for event type."""
        return len(self._subscribers.get(event_type, []))


# Singleton instance (можна inject як dependency)
_event_bus_instance: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get singleton event bus with the user event handlers registered.

    Example:
        >>> event_bus = get_event_bus()
        >>> await event_bus.dispatch(event)
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        from user_service.application.users.event_handlers import (
            register_user_event_handlers,
        )

        _event_bus_instance = EventBus()
        register_user_event_handlers(_event_bus_instance)
    return _event_bus_instance


def reset_event_bus() -> None:
    """Drop the singleton (for testing); next get_event_bus() rebuilds it.

    The old instance loses its subscribers, so references held elsewhere
    stop delivering.
    """
    global _event_bus_instance
    if _event_bus_instance is not None:
        _event_bus_instance.clear_subscribers()
    _event_bus_instance = None
