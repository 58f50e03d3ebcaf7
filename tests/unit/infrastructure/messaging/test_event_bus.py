"""Tests для EventBus та InMemoryEventPublisher."""

from unittest.mock import AsyncMock

import pytest

from user_service.domain.users.events import (
    UserCreatedEvent,
    UserEventType,
    UserUpdatedEvent,
)
from user_service.domain.users.value_objects import FieldChange
from user_service.infrastructure.messaging import (
    EventBus,
    InMemoryEventPublisher,
    get_event_bus,
    reset_event_bus,
)


def _handler(name: str = "handler") -> AsyncMock:
    handler = AsyncMock()
    handler.__name__ = name
    return handler


@pytest.fixture
def created_event():
    return UserCreatedEvent("user-1", email="jane@example.com", name="Jane")


class TestEventBus:
    """Tests для EventBus."""

    @pytest.mark.asyncio
    async def test_dispatch_routes_by_event_type(self, created_event):
        # Arrange
        bus = EventBus()
        on_created = _handler("on_created")
        on_updated = _handler("on_updated")
        bus.subscribe(UserEventType.CREATED, on_created)
        bus.subscribe(UserEventType.UPDATED, on_updated)

        # Act
        await bus.dispatch(created_event)

        # Assert
        on_created.assert_awaited_once_with(created_event)
        on_updated.assert_not_called()

    @pytest.mark.asyncio
    async def test_dispatch_propagates_handler_error(self, created_event):
        # Arrange
        bus = EventBus()
        failing = _handler()
        failing.side_effect = RuntimeError("boom")
        bus.subscribe(UserEventType.CREATED, failing)

        # Act & Assert
        with pytest.raises(RuntimeError):
            await bus.dispatch(created_event)

    @pytest.mark.asyncio
    async def test_publish_isolates_handler_errors(self, created_event):
        # Arrange
        bus = EventBus()
        failing = _handler("failing")
        failing.side_effect = RuntimeError("boom")
        second = _handler("second")
        bus.subscribe(UserEventType.CREATED, failing)
        bus.subscribe(UserEventType.CREATED, second)

        # Act
        await bus.publish(created_event)

        # Assert
        second.assert_awaited_once_with(created_event)

    @pytest.mark.asyncio
    async def test_dispatch_without_subscribers_is_noop(self, created_event):
        await EventBus().dispatch(created_event)

    def test_unsubscribe(self):
        # Arrange
        bus = EventBus()
        handler = _handler()
        bus.subscribe(UserEventType.CREATED, handler)

        # Act
        bus.unsubscribe(UserEventType.CREATED, handler)

        # Assert
        assert bus.get_subscribers_count(UserEventType.CREATED) == 0
        assert bus.has_subscribers(UserEventType.CREATED) is False

    def test_default_bus_has_user_handlers(self):
        # Arrange
        reset_event_bus()

        # Act
        bus = get_event_bus()

        # Assert
        assert bus.get_subscribers_count(UserEventType.CREATED) == 1
        assert bus.get_subscribers_count(UserEventType.UPDATED) == 1
        assert get_event_bus() is bus

        reset_event_bus()

    def test_clear_subscribers_removes_all(self):
        # Arrange
        bus = EventBus()
        bus.subscribe(UserEventType.CREATED, _handler())
        bus.subscribe(UserEventType.UPDATED, _handler())

        # Act
        bus.clear_subscribers()

        # Assert
        assert bus.has_subscribers(UserEventType.CREATED) is False
        assert bus.has_subscribers(UserEventType.UPDATED) is False

    def test_reset_detaches_old_bus(self):
        # Arrange
        reset_event_bus()
        old_bus = get_event_bus()

        # Act
        reset_event_bus()
        new_bus = get_event_bus()

        # Assert
        assert new_bus is not old_bus
        assert old_bus.get_subscribers_count(UserEventType.CREATED) == 0
        assert new_bus.get_subscribers_count(UserEventType.CREATED) == 1

        reset_event_bus()


class TestInMemoryEventPublisher:
    """Tests для InMemoryEventPublisher."""

    @pytest.mark.asyncio
    async def test_records_events(self, created_event):
        # Arrange
        publisher = InMemoryEventPublisher()

        # Act
        await publisher.publish(created_event)

        # Assert
        assert publisher.published == [created_event]
        assert publisher.events_of_type(UserEventType.CREATED) == [created_event]
        assert publisher.events_of_type(UserEventType.UPDATED) == []

    @pytest.mark.asyncio
    async def test_dispatches_wire_round_trip_to_bus(self):
        # Arrange
        bus = EventBus()
        handler = _handler()
        bus.subscribe(UserEventType.UPDATED, handler)
        publisher = InMemoryEventPublisher(event_bus=bus)
        event = UserUpdatedEvent(
            "user-1", changes={"name": FieldChange(old="Jane", new="Janet")}
        )

        # Act
        await publisher.publish(event)

        # Assert
        delivered = handler.call_args.args[0]
        assert isinstance(delivered, UserUpdatedEvent)
        assert delivered.event_id == event.event_id
        assert delivered.changes == event.changes

    @pytest.mark.asyncio
    async def test_clear(self, created_event):
        publisher = InMemoryEventPublisher()
        await publisher.publish(created_event)

        publisher.clear()

        assert publisher.published == []
