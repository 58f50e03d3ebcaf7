"""Domain Events для Users bounded context."""

from dataclasses import dataclass
from typing import Any, ClassVar

from user_service.domain.shared import DomainEvent
from user_service.domain.users.value_objects import ChangeRecord


class UserEventType:
    """Closed set of user event types (wire values)."""

    CREATED = "user.created"
    UPDATED = "user.updated"


USER_AGGREGATE_TYPE = "user"


@dataclass(frozen=True)
class UserCreatedEvent(DomainEvent):
    """Event: новий user створений.

    Subscribers можуть:
    - Відправити welcome email
    - Оновити analytics
    """

    event_type: ClassVar[str] = UserEventType.CREATED
    aggregate_type: ClassVar[str] = USER_AGGREGATE_TYPE

    email: str
    name: str

    def payload(self) -> dict[str, Any]:
        return {"email": self.email, "name": self.name}


@dataclass(frozen=True)
class UserUpdatedEvent(DomainEvent):
    """Event: user змінений через partial update.

    Carries only the fields that actually changed, as stringified old/new
    pairs. Auto-maintained fields (updated_at) never appear here.
    """

    event_type: ClassVar[str] = UserEventType.UPDATED
    aggregate_type: ClassVar[str] = USER_AGGREGATE_TYPE

    changes: ChangeRecord

    def payload(self) -> dict[str, Any]:
        return {
            "changes": {
                field_name: change.to_dict()
                for field_name, change in self.changes.items()
            }
        }
