"""Transaction Manager port - керує межами транзакції.

TransactionManager забезпечує:
- Atomic operations (all or nothing)
- Transaction boundary навколо одного use case
- Single commit per use case
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Generic, TypeVar

TContext = TypeVar("TContext")
TResult = TypeVar("TResult")


class TransactionManager(ABC, Generic[TContext]):
    """Abstract transaction manager, generic over the context type.

    The context (TContext) is whatever the storage needs to keep all
    repository calls on one transaction, e.g. an SQLAlchemy session wrapper.
    Repositories receive it as their first argument.

    Contract:
    - **Atomic**: всі repository calls в fn бачать одну транзакцію
    - **Commit**: нормальне повернення fn → commit before returning
    - **Rollback**: будь-який exception (включно з cancellation) → rollback
      and re-raise

    Example (Use case uses):
        >>> async def _create(ctx):
        ...     await validate_create_user_request(
        ...         user_repository=repo, ctx=ctx, email=email, name=name
        ...     )
        ...     return await repo.create(ctx, create_user)
        >>> user = await transaction_manager.transaction(_create)
    """

    @abstractmethod
    async def transaction(
        self, fn: Callable[[TContext], Awaitable[TResult]]
    ) -> TResult:
        """Run fn inside one transaction.

        Args:
            fn: Async callable receiving the transaction context.

        Returns:
            Whatever fn returned (after commit).

        Raises:
            Exception: Whatever fn raised (after rollback).
        """
        pass
