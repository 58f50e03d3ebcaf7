"""Pydantic schemas for domain event wire messages.

Wire form is camelCase JSON:
    {eventId, eventType, aggregateId, aggregateType, createdAt, ...payload}
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from user_service.domain.users.events import USER_AGGREGATE_TYPE, UserEventType


class EventEnvelopeMessage(BaseModel):
    """Fields shared by every event message."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    event_id: str = Field(..., min_length=1)
    aggregate_id: str = Field(..., min_length=1)
    aggregate_type: Literal[USER_AGGREGATE_TYPE]
    created_at: datetime


class FieldChangeMessage(BaseModel):
    """One {old, new} entry of user.updated changes."""

    model_config = ConfigDict(frozen=True)

    old: str
    new: str


class UserCreatedMessage(EventEnvelopeMessage):
    """user.created message."""

    event_type: Literal[UserEventType.CREATED]
    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class UserUpdatedMessage(EventEnvelopeMessage):
    """user.updated message (only fields that actually changed)."""

    event_type: Literal[UserEventType.UPDATED]
    changes: dict[Literal["email", "name", "age"], FieldChangeMessage]


# Discriminated by eventType
UserEventMessage = Annotated[
    Union[UserCreatedMessage, UserUpdatedMessage],
    Field(discriminator="event_type"),
]
