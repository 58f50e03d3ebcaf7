"""Wire message → DomainEvent parsing (worker side)."""

import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from user_service.domain.shared import DomainEvent
from user_service.domain.users.events import UserCreatedEvent, UserUpdatedEvent
from user_service.domain.users.value_objects import FieldChange

from .schemas import UserCreatedMessage, UserEventMessage, UserUpdatedMessage

logger = logging.getLogger(__name__)

_event_message_adapter: TypeAdapter[UserEventMessage] = TypeAdapter(UserEventMessage)


class InvalidEventMessage(Exception):
    """Message is not a valid event (malformed JSON, unknown type, bad fields).

    Never retried: redelivering the same bytes cannot make them valid.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


def parse_event(raw: dict[str, Any] | str | bytes) -> DomainEvent:
    """Validate wire message and rebuild the domain event.

    Args:
        raw: Decoded message dict, or JSON text/bytes.

    Returns:
        UserCreatedEvent або UserUpdatedEvent with the original envelope
        (event_id, created_at) preserved.

    Raises:
        InvalidEventMessage: Validation failed.
    """
    try:
        if isinstance(raw, (str, bytes)):
            message = _event_message_adapter.validate_json(raw)
        else:
            message = _event_message_adapter.validate_python(raw)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        logger.warning(
            "event_message.invalid",
            extra={"errors_count": len(errors)},
        )
        raise InvalidEventMessage("Invalid event message", errors=errors) from e

    return to_domain_event(message)


def to_domain_event(message: UserCreatedMessage | UserUpdatedMessage) -> DomainEvent:
    """Convert validated message schema → domain event."""
    if isinstance(message, UserCreatedMessage):
        return UserCreatedEvent(
            message.aggregate_id,
            email=message.email,
            name=message.name,
            event_id=message.event_id,
            created_at=message.created_at,
        )

    return UserUpdatedEvent(
        message.aggregate_id,
        changes={
            field_name: FieldChange(old=change.old, new=change.new)
            for field_name, change in message.changes.items()
        },
        event_id=message.event_id,
        created_at=message.created_at,
    )
