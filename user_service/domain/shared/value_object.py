"""ValueObject base для immutable domain values (UserUpdate, FieldChange)."""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """Immutable value compared by its attributes, never by identity.

    Subclasses are frozen dataclasses; invariants go in __post_init__ and
    raise ValidationError.

    Example:
        >>> FieldChange(old="30", new="null") == FieldChange(old="30", new="null")
        True
    """

    def __post_init__(self) -> None:
        """Validation hook (no rules by default)."""
