"""UNSET sentinel для sparse (partial) updates.

A partial update field has three states:

- ``UNSET``  - field not provided, leave the stored value alone
- ``None``   - field explicitly cleared (only for nullable fields)
- value      - set the field to this value
"""

from enum import Enum
from typing import Literal, TypeVar

T = TypeVar("T")


class Unset(Enum):
    """Single-member enum used as the "not provided" marker."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Literal[Unset.UNSET] = Unset.UNSET

# Field may be left out, but when provided it must carry a value.
RequiredOrUnset = T | Literal[Unset.UNSET]

# Field may be left out, cleared with None, or set.
OptionalOrUnset = T | None | Literal[Unset.UNSET]


def is_set(value: object) -> bool:
    """Check if a partial-update field was provided (None counts as provided).

    Example:
        >>> is_set(UNSET)
        False
        >>> is_set(None)
        True
    """
    return value is not UNSET
