"""Fixtures for API tests: real app, SQLite storage, in-memory events."""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.application.users import UserService
from user_service.infrastructure.messaging import InMemoryEventPublisher
from user_service.main import app
from user_service.presentation.api.dependencies import get_user_service


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def user_service(transaction_manager, user_repository, publisher):
    return UserService(
        transaction_manager=transaction_manager,
        event_publisher=publisher,
        user_repository=user_repository,
    )


@pytest.fixture
async def client(user_service):
    """httpx AsyncClient over the ASGI app (lifespan not started)."""
    app.dependency_overrides[get_user_service] = lambda: user_service

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
