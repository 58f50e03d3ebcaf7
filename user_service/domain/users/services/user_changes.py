"""Change record generation for user partial updates.

Pure function: compares a requested UserUpdate with the current User and
returns the fields whose value actually changes, as strings, ready to go into
a UserUpdatedEvent.
"""

from typing import Any

from user_service.domain.users.entities import User
from user_service.domain.users.value_objects import ChangeRecord, FieldChange, UserUpdate

NULL_PLACEHOLDER = "null"


def normalize_value(value: Any) -> str:
    """Render a field value in comparable string form (None → "null")."""
    if value is None:
        return NULL_PLACEHOLDER
    return str(value)


def generate_user_changes(update: UserUpdate, current_user: User) -> ChangeRecord:
    """Build change record between requested update and current state.

    Rules:
    - UNSET fields never participate, even if stored value differs
    - explicit None is a real value ("null") to diff against
    - a field is included iff normalized old != normalized new

    Args:
        update: Requested partial update.
        current_user: User state before the write.

    Returns:
        Dict field → FieldChange (insertion order follows UserUpdate fields).

    Example:
        >>> generate_user_changes(UserUpdate(age=None), user_with_age_30)
        {'age': FieldChange(old='30', new='null')}
    """
    changes: ChangeRecord = {}

    for field_name, new_value in update.provided_fields().items():
        old = normalize_value(getattr(current_user, field_name))
        new = normalize_value(new_value)
        if old != new:
            changes[field_name] = FieldChange(old=old, new=new)

    return changes
