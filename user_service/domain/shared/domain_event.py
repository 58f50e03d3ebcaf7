"""Base DomainEvent class for event-driven architecture.

DomainEvent - щось важливе що сталось в domain, про що треба повідомити інші частини системи.
Events дозволяють decoupling: domain logic не знає хто і як обробляє events.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent(ABC):
    """Base class for all domain events.

    DomainEvent репрезентує факт що щось сталося з aggregate.
    Events іменуються в минулому часі (UserCreated, UserUpdated).

    Характеристики:
    - **Immutable**: Events не змінюються після створення
    - **Envelope**: event_id, event_type, aggregate_id, aggregate_type, created_at
    - **Type-specific payload**: subclasses add their own fields
    - **Unique**: Кожна подія має унікальний ID

    Example:
        >>> @dataclass(frozen=True)
        ... class UserCreatedEvent(DomainEvent):
        ...     event_type: ClassVar[str] = "user.created"
        ...     aggregate_type: ClassVar[str] = "user"
        ...
        ...     email: str
        ...     name: str
        ...
        ...     def payload(self) -> dict[str, Any]:
        ...         return {"email": self.email, "name": self.name}

        >>> event = UserCreatedEvent("0b4c...", email="a@x.com", name="A")
        >>> event.to_message()["eventType"]
        'user.created'
    """

    event_type: ClassVar[str]
    """Closed-set event type, e.g. "user.created"."""

    aggregate_type: ClassVar[str]
    """Aggregate the event belongs to, e.g. "user"."""

    aggregate_id: str
    """ID of the aggregate instance that changed."""

    event_id: str = field(default_factory=lambda: str(uuid4()), kw_only=True)
    """Унікальний ID події (auto-generated)."""

    created_at: datetime = field(default_factory=_utcnow, kw_only=True)
    """Час коли подія сталась (auto-generated, UTC)."""

    @abstractmethod
    def payload(self) -> dict[str, Any]:
        """Type-specific part of the wire message."""

    def to_message(self) -> dict[str, Any]:
        """Build the wire message: envelope + payload, camelCase keys.

        Returns:
            JSON-serializable dict.
        """
        return {
            "eventId": self.event_id,
            "eventType": self.event_type,
            "aggregateId": self.aggregate_id,
            "aggregateType": self.aggregate_type,
            "createdAt": self.created_at.isoformat(),
            **self.payload(),
        }

    @property
    def event_name(self) -> str:
        """Get human-readable event name (class name)."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return (
            f"{self.event_name}(event_id={self.event_id}, "
            f"aggregate_id={self.aggregate_id}, created_at={self.created_at})"
        )
