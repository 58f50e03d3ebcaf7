"""Event Publisher port - відправка domain events в message bus."""

from abc import ABC, abstractmethod
from typing import Any

from user_service.domain.shared import DomainEvent


class EventPublishError(Exception):
    """Publishing an event to the message bus failed.

    Raised after the storage transaction already committed, so the write it
    describes is durable even though subscribers will not hear about it.
    """

    def __init__(self, message: str, event: DomainEvent, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.event = event
        self.context = context

    def __str__(self) -> str:
        return (
            f"{self.message} (event_type={self.event.event_type}, "
            f"event_id={self.event.event_id})"
        )


class EventPublisher(ABC):
    """Abstract event publisher.

    publish() is best-effort and called outside any storage transaction.
    Implementations do not retry: a failure surfaces as EventPublishError.

    Example:
        >>> await publisher.publish(UserCreatedEvent(user.id, email=..., name=...))
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver one event to its topic/queue.

        Raises:
            EventPublishError: Transport rejected or failed to accept the event.
        """
        pass
