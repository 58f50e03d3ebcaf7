"""Shared Kernel - base classes для всієї domain layer.

Shared Kernel містить building blocks:
- ValueObject: Immutable об'єкт порівнюваний за значенням
- DomainEvent: Подія що сталась в domain
- UNSET: маркер "поле не передано" для partial updates
- DomainException та його підкласи
"""

from .domain_event import DomainEvent
from .exceptions import (
    BusinessRuleError,
    DatabaseError,
    DomainException,
    DuplicateError,
    NoFieldsToUpdateError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from .unset import UNSET, OptionalOrUnset, RequiredOrUnset, Unset, is_set
from .value_object import ValueObject

__all__ = [
    # Base classes
    "ValueObject",
    "DomainEvent",
    # Partial updates
    "UNSET",
    "Unset",
    "RequiredOrUnset",
    "OptionalOrUnset",
    "is_set",
    # Exceptions
    "DomainException",
    "ValidationError",
    "BusinessRuleError",
    "NotFoundError",
    "DuplicateError",
    "NoFieldsToUpdateError",
    "RepositoryError",
    "DatabaseError",
]
