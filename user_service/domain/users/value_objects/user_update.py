"""UserUpdate - sparse partial update over the mutable User fields."""

from dataclasses import dataclass, fields
from typing import Any

from user_service.domain.shared import (
    UNSET,
    OptionalOrUnset,
    RequiredOrUnset,
    ValidationError,
    ValueObject,
    is_set,
)

# Fields that cannot be cleared with an explicit None.
REQUIRED_FIELDS = ("email", "name")


@dataclass(frozen=True)
class UserUpdate(ValueObject):
    """Tri-state partial update.

    Each field is UNSET (leave alone), None (clear; only age), or a value.

    Example:
        >>> UserUpdate(name="Jane")                 # only name
        >>> UserUpdate(age=None)                    # clear age
        >>> UserUpdate(email=None)                  # ValidationError
    """

    email: RequiredOrUnset[str] = UNSET
    name: RequiredOrUnset[str] = UNSET
    age: OptionalOrUnset[int] = UNSET

    def __post_init__(self) -> None:
        for field_name in REQUIRED_FIELDS:
            if getattr(self, field_name) is None:
                raise ValidationError(
                    f"{field_name} cannot be null", field=field_name
                )

    def provided_fields(self) -> dict[str, Any]:
        """Get fields that were explicitly provided (None included).

        Returns:
            Dict field name → value, in declaration order.
        """
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if is_set(getattr(self, f.name))
        }

    @property
    def is_empty(self) -> bool:
        """True if no field was provided."""
        return not self.provided_fields()
