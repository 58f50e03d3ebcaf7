"""User Entity - the single aggregate root of the service."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """User aggregate as read from storage.

    Immutable snapshot: repositories return a new instance after every write.

    Invariants:
    - id is assigned once at creation (UUID string) and never reassigned
    - email is unique across all users (case-sensitive)
    - name is non-empty and at most 255 characters
    - age is None or a non-negative integer
    - updated_at advances on every successful mutation
    """

    id: str
    email: str
    name: str
    age: int | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CreateUser:
    """Fully-populated insert payload (id and timestamps generated by the service)."""

    id: str
    email: str
    name: str
    age: int | None
    created_at: datetime
    updated_at: datetime
