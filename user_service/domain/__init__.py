"""Domain Layer - Pure Business Logic.

This layer contains:
- Bounded Context users (User aggregate)
- Value Objects (UserUpdate, FieldChange)
- Domain Services (change records, request validators)
- Domain Events (user.created, user.updated)
- Repository Interfaces (ports)

Key Principles:
- Zero dependencies on infrastructure
- Pure business logic only
- Ubiquitous language
"""

# Shared kernel
from .shared import UNSET, DomainEvent, DomainException

__all__ = [
    "UNSET",
    "DomainEvent",
    "DomainException",
]
