"""UserService - orchestrates every User use case.

Це CORE сервісу: validated, transactional writes followed by diff-shaped
event construction and a single publish per successful mutation.

Flow of every mutating call:
1. **Validate** (inside the transaction, against repository state)
2. **Diff** (patch only, against the pre-write entity)
3. **Write** through the repository
4. **Commit** (TransactionManager)
5. **Publish** the domain event, outside the transaction
"""

import logging
from datetime import datetime, timezone
from uuid import uuid4

from user_service.application.shared import EventPublisher, TransactionManager
from user_service.domain.shared import UNSET, DomainEvent, OptionalOrUnset, RequiredOrUnset
from user_service.domain.users.entities import CreateUser, User
from user_service.domain.users.events import UserCreatedEvent, UserUpdatedEvent
from user_service.domain.users.repositories import (
    NoFieldsToUpdate,
    TContext,
    UserRepository,
)
from user_service.domain.users.services import (
    generate_user_changes,
    validate_create_user_request,
    validate_delete_user_request,
    validate_patch_user_request,
)
from user_service.domain.users.value_objects import ChangeRecord, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Application service для User aggregate.

    Each operation runs exactly one transaction() that performs all reads and
    writes of the use case. Events are published only after that transaction
    committed; a publish failure propagates to the caller while the write
    stays durable.

    Example:
        >>> service = UserService(
        ...     transaction_manager=SQLAlchemyTransactionManager(session_factory),
        ...     event_publisher=CeleryEventPublisher(celery_app, settings),
        ...     user_repository=SQLAlchemyUserRepository(),
        ... )
        >>> user = await service.create_user(email="jane@x.com", name="Jane")
        >>> user = await service.patch_user(user.id, age=None)
    """

    def __init__(
        self,
        transaction_manager: TransactionManager[TContext],
        event_publisher: EventPublisher,
        user_repository: UserRepository[TContext],
    ) -> None:
        """Initialize service.

        Args:
            transaction_manager: Transaction boundary provider.
            event_publisher: Message bus port.
            user_repository: User persistence port (same context type as
                the transaction manager).
        """
        self.transaction_manager = transaction_manager
        self.event_publisher = event_publisher
        self.user_repository = user_repository

    async def create_user(self, email: str, name: str, age: int | None = None) -> User:
        """Create user and publish UserCreatedEvent.

        Returns:
            Stored User (created_at == updated_at).

        Raises:
            ValidationError: Empty name.
            DuplicateError: Email already taken.
            EventPublishError: Publish failed (user is already stored).
        """
        now = datetime.now(timezone.utc)
        create_user = CreateUser(
            id=str(uuid4()),
            email=email,
            name=name,
            age=age,
            created_at=now,
            updated_at=now,
        )

        async def _create(ctx: TContext) -> User:
            await validate_create_user_request(
                user_repository=self.user_repository,
                ctx=ctx,
                email=email,
                name=name,
            )
            return await self.user_repository.create(ctx, create_user)

        user = await self.transaction_manager.transaction(_create)

        logger.info("user.created", extra={"user_id": user.id})

        await self._publish(
            UserCreatedEvent(user.id, email=user.email, name=user.name)
        )

        return user

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID (None if absent)."""

        async def _get(ctx: TContext) -> User | None:
            return await self.user_repository.get_by_id(ctx, user_id)

        return await self.transaction_manager.transaction(_get)

    async def patch_user(
        self,
        user_id: str,
        *,
        email: RequiredOrUnset[str] = UNSET,
        name: RequiredOrUnset[str] = UNSET,
        age: OptionalOrUnset[int] = UNSET,
    ) -> User:
        """Partially update user.

        Idempotent: якщо всі передані значення вже збережені, повертає
        незмінений user (той самий updated_at) і нічого не публікує.

        Args:
            user_id: Target user.
            email: New email, or UNSET.
            name: New name, or UNSET.
            age: New age, None to clear, or UNSET.

        Returns:
            Updated (or unchanged) User.

        Raises:
            NotFoundError: User absent.
            ValidationError: Empty name, or null email/name.
            DuplicateError: Email taken by another user.
            EventPublishError: Publish failed (update is already stored).
        """

        # null email/name → ValidationError before any repository call
        update = UserUpdate(email=email, name=name, age=age)

        async def _patch(ctx: TContext) -> tuple[User, ChangeRecord]:
            current = await validate_patch_user_request(
                user_repository=self.user_repository,
                ctx=ctx,
                user_id=user_id,
                email=update.email,
                name=update.name,
            )
            changes = generate_user_changes(update, current)

            result = await self.user_repository.update_partial(ctx, user_id, update)
            if isinstance(result, NoFieldsToUpdate):
                return current, {}

            return result.user, changes

        user, changes = await self.transaction_manager.transaction(_patch)

        if not changes:
            logger.debug("user.patch.noop", extra={"user_id": user_id})
            return user

        logger.info(
            "user.updated",
            extra={"user_id": user_id, "fields": list(changes)},
        )

        await self._publish(UserUpdatedEvent(user.id, changes=changes))

        return user

    async def list_users(self, limit: int, offset: int) -> tuple[list[User], int]:
        """Get one page of users plus the total count (one transaction)."""

        async def _list(ctx: TContext) -> tuple[list[User], int]:
            users = await self.user_repository.list(ctx, limit, offset)
            total = await self.user_repository.count(ctx)
            return users, total

        return await self.transaction_manager.transaction(_list)

    async def delete_user(self, user_id: str) -> None:
        """Delete user.

        Raises:
            NotFoundError: User absent.
        """

        async def _delete(ctx: TContext) -> None:
            await validate_delete_user_request(
                user_repository=self.user_repository, ctx=ctx, user_id=user_id
            )
            await self.user_repository.delete(ctx, user_id)

        await self.transaction_manager.transaction(_delete)

        logger.info("user.deleted", extra={"user_id": user_id})

    async def _publish(self, event: DomainEvent) -> None:
        """Publish event after commit. Failures propagate unchanged."""
        await self.event_publisher.publish(event)
        logger.info(
            "user.event.published",
            extra={
                "event_type": event.event_type,
                "event_id": event.event_id,
                "aggregate_id": event.aggregate_id,
            },
        )
