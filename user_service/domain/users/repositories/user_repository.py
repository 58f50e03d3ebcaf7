"""UserRepository Port - interface для persistence User aggregate.

Це PORT в Hexagonal Architecture (domain визначає interface).
Infrastructure layer має implement цей interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..entities import CreateUser, User
from ..value_objects import UserUpdate

TContext = TypeVar("TContext")


@dataclass(frozen=True)
class UserUpdated:
    """update_partial wrote at least one column."""

    user: User


@dataclass(frozen=True)
class NoFieldsToUpdate:
    """update_partial had nothing to write; the stored row is untouched."""


PartialUpdateResult = UserUpdated | NoFieldsToUpdate


class UserRepository(ABC, Generic[TContext]):
    """Abstract interface для user persistence.

    Every method receives the transaction context as its first argument and
    works only through it: a repository never opens, commits or rolls back a
    transaction on its own. The context type is whatever the paired
    TransactionManager hands out.

    Errors:
        DuplicateError: unique email violated at storage level.
        NotFoundError: update/update_partial target row absent.
        DatabaseError: any other storage failure (driver errors never leak).

    Example (Domain uses):
        >>> async def _load(ctx):
        ...     return await user_repo.get_by_id(ctx, user_id)
        >>> user = await transaction_manager.transaction(_load)
    """

    @abstractmethod
    async def create(self, ctx: TContext, create_user: CreateUser) -> User:
        """Insert a new user.

        Args:
            ctx: Transaction context.
            create_user: Fully populated insert payload.

        Returns:
            Stored User.
        """
        pass

    @abstractmethod
    async def get_by_id(self, ctx: TContext, user_id: str) -> User | None:
        """Get user by ID.

        Returns:
            User або None якщо не знайдено.
        """
        pass

    @abstractmethod
    async def get_by_email(self, ctx: TContext, email: str) -> User | None:
        """Get user by exact (case-sensitive) email."""
        pass

    @abstractmethod
    async def update(self, ctx: TContext, user: User) -> User:
        """Full replace of the mutable fields (email, name, age, updated_at)."""
        pass

    @abstractmethod
    async def update_partial(
        self, ctx: TContext, user_id: str, update: UserUpdate
    ) -> PartialUpdateResult:
        """Sparse update: write only provided fields that differ from storage.

        Args:
            ctx: Transaction context.
            user_id: Target user ID.
            update: Tri-state update (UNSET fields are skipped).

        Returns:
            UserUpdated з новим станом, або NoFieldsToUpdate якщо писати нічого
            (updated_at is not touched in that case).
        """
        pass

    @abstractmethod
    async def delete(self, ctx: TContext, user_id: str) -> None:
        """Delete user by ID (no-op if absent)."""
        pass

    @abstractmethod
    async def list(self, ctx: TContext, limit: int, offset: int) -> list[User]:
        """Get a page of users, newest first.

        Args:
            ctx: Transaction context.
            limit: Page size.
            offset: Rows to skip.
        """
        pass

    @abstractmethod
    async def count(self, ctx: TContext) -> int:
        """Total number of users."""
        pass
