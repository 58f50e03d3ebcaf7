"""SQLAlchemyUserRepository - implements UserRepository port.

Infrastructure implementation of domain UserRepository interface.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from user_service.domain.shared import DatabaseError, DuplicateError, NotFoundError
from user_service.domain.users.entities import CreateUser, User
from user_service.domain.users.repositories import (
    NoFieldsToUpdate,
    PartialUpdateResult,
    UserRepository,
    UserUpdated,
)
from user_service.domain.users.value_objects import UserUpdate
from user_service.infrastructure.persistence.sqlalchemy.context import SQLAlchemyContext
from user_service.infrastructure.persistence.sqlalchemy.mappers.user_mapper import (
    UserMapper,
)
from user_service.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "uq_users_email"


@contextmanager
def _storage_errors(operation: str, **context: Any) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain storage errors.

    IntegrityError on the email constraint → DuplicateError,
    any other SQLAlchemyError → DatabaseError. Domain exceptions pass through.
    """
    try:
        yield
    except IntegrityError as e:
        if EMAIL_CONSTRAINT in str(e.orig) or "users.email" in str(e.orig):
            logger.info(
                "user_repository.duplicate_email",
                extra={"operation": operation, **context},
            )
            raise DuplicateError("User with this email already exists", **context) from e
        logger.error(
            "user_repository.integrity_error",
            extra={"operation": operation, "error": str(e.orig), **context},
        )
        raise DatabaseError(operation=operation, **context) from e
    except SQLAlchemyError as e:
        logger.error(
            "user_repository.database_error",
            extra={"operation": operation, "error": str(e), **context},
            exc_info=True,
        )
        raise DatabaseError(operation=operation, **context) from e


class SQLAlchemyUserRepository(UserRepository[SQLAlchemyContext]):
    """SQLAlchemy implementation of UserRepository.

    Stateless: all state lives in the session carried by ctx.

    Example:
        >>> repo = SQLAlchemyUserRepository()
        >>> async def _load(ctx):
        ...     return await repo.get_by_email(ctx, "jane@x.com")
        >>> user = await transaction_manager.transaction(_load)
    """

    def __init__(self) -> None:
        """Initialize repository."""
        self._mapper = UserMapper()

    async def create(self, ctx: SQLAlchemyContext, create_user: CreateUser) -> User:
        """Insert user (flush, no commit)."""
        model = self._mapper.to_model(create_user)

        with _storage_errors("create", user_id=create_user.id):
            ctx.session.add(model)
            await ctx.session.flush()

        return self._mapper.to_entity(model)

    async def get_by_id(self, ctx: SQLAlchemyContext, user_id: str) -> User | None:
        """Get user by ID.

        Returns:
            User entity або None.
        """
        with _storage_errors("get_by_id", user_id=user_id):
            model = await ctx.session.get(UserModel, user_id)

        if model is None:
            return None
        return self._mapper.to_entity(model)

    async def get_by_email(self, ctx: SQLAlchemyContext, email: str) -> User | None:
        """Get user by exact email."""
        stmt = select(UserModel).where(UserModel.email == email)

        with _storage_errors("get_by_email"):
            result = await ctx.session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._mapper.to_entity(model)

    async def update(self, ctx: SQLAlchemyContext, user: User) -> User:
        """Full replace of the mutable fields.

        Raises:
            NotFoundError: Row absent.
        """
        with _storage_errors("update", user_id=user.id):
            model = await ctx.session.get(UserModel, user.id)
            if model is None:
                raise NotFoundError("User", user.id)

            self._mapper.update_model(user, model)
            await ctx.session.flush()

        return self._mapper.to_entity(model)

    async def update_partial(
        self, ctx: SQLAlchemyContext, user_id: str, update: UserUpdate
    ) -> PartialUpdateResult:
        """Write only provided fields that differ from the stored row.

        Returns:
            UserUpdated (updated_at bumped) або NoFieldsToUpdate (row untouched).

        Raises:
            NotFoundError: Row absent.
        """
        with _storage_errors("update_partial", user_id=user_id):
            model = await ctx.session.get(UserModel, user_id)
            if model is None:
                raise NotFoundError("User", user_id)

            values = {
                field_name: value
                for field_name, value in update.provided_fields().items()
                if getattr(model, field_name) != value
            }
            if not values:
                return NoFieldsToUpdate()

            for field_name, value in values.items():
                setattr(model, field_name, value)
            model.updated_at = datetime.now(timezone.utc)

            await ctx.session.flush()

        return UserUpdated(user=self._mapper.to_entity(model))

    async def delete(self, ctx: SQLAlchemyContext, user_id: str) -> None:
        """Delete user by ID (no-op if absent)."""
        stmt = delete(UserModel).where(UserModel.id == user_id)

        with _storage_errors("delete", user_id=user_id):
            await ctx.session.execute(stmt)

    async def count(self, ctx: SQLAlchemyContext) -> int:
        """Total number of users."""
        stmt = select(func.count()).select_from(UserModel)

        with _storage_errors("count"):
            result = await ctx.session.execute(stmt)
            return result.scalar_one()

    async def list(
        self, ctx: SQLAlchemyContext, limit: int, offset: int
    ) -> list[User]:
        """Get a page of users (newest first, id as tie-breaker)."""
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at.desc(), UserModel.id)
            .limit(limit)
            .offset(offset)
        )

        with _storage_errors("list", limit=limit, offset=offset):
            result = await ctx.session.execute(stmt)
            models = result.scalars().all()

        return [self._mapper.to_entity(model) for model in models]
