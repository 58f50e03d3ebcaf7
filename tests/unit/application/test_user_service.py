"""Unit tests для UserService (ports mocked)."""

from dataclasses import asdict, replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from user_service.application.shared import (
    EventPublisher,
    EventPublishError,
    TransactionManager,
)
from user_service.application.users import UserService
from user_service.domain.shared import DuplicateError, NotFoundError, ValidationError
from user_service.domain.users.entities import User
from user_service.domain.users.events import UserCreatedEvent, UserUpdatedEvent
from user_service.domain.users.repositories import (
    NoFieldsToUpdate,
    UserRepository,
    UserUpdated,
)
from user_service.domain.users.value_objects import FieldChange, UserUpdate
from user_service.infrastructure.messaging import InMemoryEventPublisher


class FakeTransactionManager(TransactionManager[object]):
    """Runs fn with a dummy context and counts commits/rollbacks."""

    def __init__(self) -> None:
        self.ctx = object()
        self.commits = 0
        self.rollbacks = 0

    async def transaction(self, fn):
        try:
            result = await fn(self.ctx)
        except BaseException:
            self.rollbacks += 1
            raise
        self.commits += 1
        return result


@pytest.fixture
def transaction_manager():
    return FakeTransactionManager()


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def user_repository():
    """Mock UserRepository: empty storage, create echoes the payload."""
    repo = AsyncMock(spec=UserRepository)
    repo.get_by_id.return_value = None
    repo.get_by_email.return_value = None
    repo.create.side_effect = lambda ctx, create_user: User(**asdict(create_user))
    return repo


@pytest.fixture
def service(transaction_manager, publisher, user_repository):
    return UserService(
        transaction_manager=transaction_manager,
        event_publisher=publisher,
        user_repository=user_repository,
    )


class TestCreateUser:
    """Tests для create_user."""

    @pytest.mark.asyncio
    async def test_create_user_success(self, service, publisher, transaction_manager):
        """Test: generated id, age None, created_at == updated_at, event published."""
        # Act
        user = await service.create_user(email="jane@example.com", name="Jane")

        # Assert
        assert UUID(user.id).version == 4
        assert user.age is None
        assert user.created_at == user.updated_at
        assert user.created_at.tzinfo is not None
        assert transaction_manager.commits == 1

        assert len(publisher.published) == 1
        event = publisher.published[0]
        assert isinstance(event, UserCreatedEvent)
        assert event.aggregate_id == user.id
        assert event.email == "jane@example.com"
        assert event.name == "Jane"

    @pytest.mark.asyncio
    async def test_create_passes_age(self, service, user_repository):
        # Act
        user = await service.create_user(email="jane@example.com", name="Jane", age=30)

        # Assert
        assert user.age == 30
        create_user = user_repository.create.call_args.args[1]
        assert create_user.age == 30

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(
        self, service, user_repository, publisher, transaction_manager, sample_user
    ):
        # Arrange
        user_repository.get_by_email.return_value = sample_user

        # Act & Assert
        with pytest.raises(DuplicateError):
            await service.create_user(email=sample_user.email, name="Other")

        user_repository.create.assert_not_called()
        assert publisher.published == []
        assert transaction_manager.rollbacks == 1

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, service, user_repository, publisher):
        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.create_user(email="jane@example.com", name="  ")

        assert exc_info.value.field == "name"
        user_repository.create.assert_not_called()
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_overlong_name_rejected(self, service, user_repository, publisher):
        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.create_user(email="jane@example.com", name="a" * 256)

        assert exc_info.value.field == "name"
        user_repository.create.assert_not_called()
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_publish_failure_propagates_after_commit(
        self, transaction_manager, user_repository
    ):
        """Test: write committed, publish failure → EventPublishError."""
        # Arrange
        async def _fail(event):
            raise EventPublishError("broker down", event)

        publisher = AsyncMock(spec=EventPublisher)
        publisher.publish.side_effect = _fail
        service = UserService(
            transaction_manager=transaction_manager,
            event_publisher=publisher,
            user_repository=user_repository,
        )

        # Act & Assert
        with pytest.raises(EventPublishError):
            await service.create_user(email="jane@example.com", name="Jane")

        assert transaction_manager.commits == 1
        assert transaction_manager.rollbacks == 0
        user_repository.create.assert_awaited_once()


class TestGetUser:
    """Tests для get_user."""

    @pytest.mark.asyncio
    async def test_returns_user(self, service, user_repository, sample_user):
        user_repository.get_by_id.return_value = sample_user

        assert await service.get_user(sample_user.id) == sample_user

    @pytest.mark.asyncio
    async def test_returns_none_when_absent(self, service):
        assert await service.get_user("missing") is None


class TestPatchUser:
    """Tests для patch_user."""

    @pytest.mark.asyncio
    async def test_patch_name_publishes_changes(
        self, service, user_repository, publisher, sample_user
    ):
        # Arrange
        updated = replace(
            sample_user,
            name="Janet",
            updated_at=datetime(2026, 1, 16, tzinfo=timezone.utc),
        )
        user_repository.get_by_id.return_value = sample_user
        user_repository.update_partial.return_value = UserUpdated(user=updated)

        # Act
        user = await service.patch_user(sample_user.id, name="Janet")

        # Assert
        assert user == updated
        user_repository.update_partial.assert_awaited_once()
        assert user_repository.update_partial.call_args.args[2] == UserUpdate(name="Janet")

        assert len(publisher.published) == 1
        event = publisher.published[0]
        assert isinstance(event, UserUpdatedEvent)
        assert event.aggregate_id == sample_user.id
        assert event.changes == {"name": FieldChange(old="Jane", new="Janet")}

    @pytest.mark.asyncio
    async def test_patch_null_age(self, service, user_repository, publisher, sample_user):
        """Test: age=None clears age, change record old "30" → new "null"."""
        # Arrange
        user_repository.get_by_id.return_value = sample_user
        user_repository.update_partial.return_value = UserUpdated(
            user=replace(sample_user, age=None)
        )

        # Act
        user = await service.patch_user(sample_user.id, age=None)

        # Assert
        assert user.age is None
        assert user_repository.update_partial.call_args.args[2] == UserUpdate(age=None)
        assert publisher.published[0].changes == {
            "age": FieldChange(old="30", new="null")
        }

    @pytest.mark.asyncio
    async def test_noop_patch_returns_current_without_event(
        self, service, user_repository, publisher, sample_user
    ):
        """Test: всі values рівні збереженим → unchanged user, zero events."""
        # Arrange
        user_repository.get_by_id.return_value = sample_user
        user_repository.update_partial.return_value = NoFieldsToUpdate()

        # Act
        user = await service.patch_user(
            sample_user.id,
            email=sample_user.email,
            name=sample_user.name,
            age=sample_user.age,
        )

        # Assert
        assert user == sample_user
        assert user.updated_at == sample_user.updated_at
        assert publisher.published == []
        user_repository.get_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_patch_to_own_email_is_not_duplicate(
        self, service, user_repository, sample_user
    ):
        # Arrange
        user_repository.get_by_id.return_value = sample_user
        user_repository.update_partial.return_value = NoFieldsToUpdate()

        # Act
        user = await service.patch_user(sample_user.id, email=sample_user.email)

        # Assert
        assert user == sample_user
        user_repository.get_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_patch_to_other_users_email_rejected(
        self, service, user_repository, publisher, sample_user, make_user
    ):
        # Arrange
        user_repository.get_by_id.return_value = sample_user
        user_repository.get_by_email.return_value = make_user(
            id="other", email="taken@example.com"
        )

        # Act & Assert
        with pytest.raises(DuplicateError):
            await service.patch_user(sample_user.id, email="taken@example.com")

        user_repository.update_partial.assert_not_called()
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_patch_unknown_user(self, service, user_repository, publisher):
        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.patch_user("missing", name="Jane")

        user_repository.update_partial.assert_not_called()
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_patch_empty_name_rejected_before_write(
        self, service, user_repository, publisher, sample_user
    ):
        # Arrange
        user_repository.get_by_id.return_value = sample_user

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.patch_user(sample_user.id, name="")

        user_repository.update_partial.assert_not_called()
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_patch_null_email_rejected(self, service, user_repository, sample_user):
        # Arrange
        user_repository.get_by_id.return_value = sample_user

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.patch_user(sample_user.id, email=None)  # type: ignore[arg-type]

        assert exc_info.value.field == "email"
        user_repository.get_by_email.assert_not_awaited()
        user_repository.update_partial.assert_not_called()

    @pytest.mark.asyncio
    async def test_patch_null_name_rejected(
        self, service, user_repository, transaction_manager, publisher, sample_user
    ):
        # Arrange
        user_repository.get_by_id.return_value = sample_user

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await service.patch_user(sample_user.id, name=None)  # type: ignore[arg-type]

        assert exc_info.value.field == "name"
        user_repository.get_by_id.assert_not_awaited()
        user_repository.get_by_email.assert_not_awaited()
        user_repository.update_partial.assert_not_called()
        assert transaction_manager.commits == 0
        assert publisher.published == []


class TestListUsers:
    """Tests для list_users."""

    @pytest.mark.asyncio
    async def test_page_and_total_in_one_transaction(
        self, service, user_repository, transaction_manager, sample_user
    ):
        # Arrange
        user_repository.list.return_value = [sample_user]
        user_repository.count.return_value = 41

        # Act
        users, total = await service.list_users(limit=20, offset=20)

        # Assert
        assert users == [sample_user]
        assert total == 41
        user_repository.list.assert_awaited_once_with(transaction_manager.ctx, 20, 20)
        assert transaction_manager.commits == 1


class TestDeleteUser:
    """Tests для delete_user."""

    @pytest.mark.asyncio
    async def test_delete_existing_user(
        self, service, user_repository, publisher, transaction_manager, sample_user
    ):
        # Arrange
        user_repository.get_by_id.return_value = sample_user

        # Act
        await service.delete_user(sample_user.id)

        # Assert
        user_repository.delete.assert_awaited_once_with(
            transaction_manager.ctx, sample_user.id
        )
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, service, user_repository):
        with pytest.raises(NotFoundError):
            await service.delete_user("missing")

        user_repository.delete.assert_not_called()
