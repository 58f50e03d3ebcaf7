"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from user_service.domain.users.entities import User
from user_service.infrastructure.persistence.sqlalchemy import (
    Base,
    SQLAlchemyTransactionManager,
    SQLAlchemyUserRepository,
)


@pytest.fixture
def make_user():
    """Factory для User entities в tests."""

    def _make_user(**overrides) -> User:
        now = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)
        data = {
            "id": "5f0c7c1e-2d3a-4b8e-9f10-1a2b3c4d5e6f",
            "email": "jane@example.com",
            "name": "Jane",
            "age": 30,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return User(**data)

    return _make_user


@pytest.fixture
def sample_user(make_user) -> User:
    """Sample User (age 30) для tests."""
    return make_user()


# ============================================================================
# DATABASE (in-memory SQLite)
# ============================================================================


@pytest.fixture
async def engine():
    """Create async SQLite engine for testing.

    StaticPool: every session shares the one in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,  # Set to True для debug
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    """Create async session factory."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Важливо для testing
    )


@pytest.fixture
def transaction_manager(session_factory):
    return SQLAlchemyTransactionManager(session_factory)


@pytest.fixture
def user_repository():
    return SQLAlchemyUserRepository()
