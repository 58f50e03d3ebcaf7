"""Base domain exceptions.

Domain exceptions представляють порушення бізнес-правил та стабільні
storage-сигнали, які caller може обробити окремо. Вони частина domain layer
і не залежать від infrastructure.

Taxonomy:
    DomainException
    ├── ValidationError         input violates a domain rule
    ├── BusinessRuleError       operation not allowed in the current state
    ├── NotFoundError           referenced aggregate absent
    ├── DuplicateError          uniqueness violation
    ├── NoFieldsToUpdateError   partial update with nothing to write
    └── RepositoryError         any other storage failure
        └── DatabaseError
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain errors.

    Example:
        >>> raise DomainException("User cannot be deleted", user_id="0b4c...")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (user_id, field, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context.

        Returns:
            Error message with context if available.
        """
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ValidationError(DomainException):
    """Caller input violates a domain rule.

    Example:
        >>> raise ValidationError("Name cannot be empty", field="name")
    """

    def __init__(self, message: str, field: str | None = None, **context: Any) -> None:
        super().__init__(message, **context)
        self.field = field


class BusinessRuleError(DomainException):
    """Exception raised when a business rule is violated."""

    pass


class NotFoundError(DomainException):
    """Exception raised when an aggregate is not found.

    Example:
        >>> user = await user_repo.get_by_id(ctx, user_id)
        >>> if user is None:
        ...     raise NotFoundError("User", user_id)
    """

    def __init__(self, entity_type: str, identifier: str) -> None:
        super().__init__(f"{entity_type} with identifier {identifier} not found")
        self.entity_type = entity_type
        self.identifier = identifier


class DuplicateError(DomainException):
    """Uniqueness violation (e.g. email already taken)."""

    pass


class NoFieldsToUpdateError(DomainException):
    """Partial update had nothing to write."""

    def __init__(self, message: str = "No fields to update") -> None:
        super().__init__(message)


class RepositoryError(DomainException):
    """Storage failure. Message is safe to log, never shown to API callers."""

    pass


class DatabaseError(RepositoryError):
    """Database driver / SQL failure wrapped by a repository."""

    def __init__(self, message: str = "Database error occurred", **context: Any) -> None:
        super().__init__(message, **context)
