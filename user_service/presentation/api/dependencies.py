"""Dependency injection for FastAPI.

Provides dependencies для API routes:
- TransactionManager (per request, over the shared session factory)
- EventPublisher (singleton)
- UserService (composed by constructor injection)
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.application.shared import EventPublisher
from user_service.application.users import UserService
from user_service.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyUserRepository,
    create_transaction_manager,
)

# ============================================================================
# GLOBAL DEPENDENCIES (будуть initialized в main.py)
# ============================================================================

# Database session factory (буде встановлено при startup)
_session_factory: async_sessionmaker[AsyncSession] | None = None

# Event publisher (singleton)
_event_publisher: EventPublisher | None = None


def init_dependencies(
    session_factory: async_sessionmaker[AsyncSession],
    event_publisher: EventPublisher,
) -> None:
    """Initialize global dependencies.

    Args:
        session_factory: SQLAlchemy async session factory.
        event_publisher: Event publisher instance.

    Note:
        Викликається при FastAPI startup (в main.py lifespan).
    """
    global _session_factory, _event_publisher
    _session_factory = session_factory
    _event_publisher = event_publisher


def reset_dependencies() -> None:
    """Forget initialized dependencies (shutdown / tests)."""
    global _session_factory, _event_publisher
    _session_factory = None
    _event_publisher = None


# ============================================================================
# EVENT PUBLISHER
# ============================================================================


async def get_event_publisher() -> EventPublisher:
    """Get Event Publisher instance.

    Raises:
        RuntimeError: If dependencies not initialized.
    """
    if _event_publisher is None:
        raise RuntimeError(
            "Dependencies not initialized. Call init_dependencies() first."
        )

    return _event_publisher


# ============================================================================
# USER SERVICE
# ============================================================================


async def get_user_service(
    event_publisher: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> UserService:
    """Get UserService instance.

    Raises:
        RuntimeError: If dependencies not initialized.

    Note:
        Service створюється для кожного request з injected dependencies.
    """
    if _session_factory is None:
        raise RuntimeError(
            "Dependencies not initialized. Call init_dependencies() first."
        )

    return UserService(
        transaction_manager=create_transaction_manager(_session_factory),
        event_publisher=event_publisher,
        user_repository=SQLAlchemyUserRepository(),
    )


# ============================================================================
# TYPE ALIASES (для cleaner route signatures)
# ============================================================================

UserServiceDep = Annotated[UserService, Depends(get_user_service)]
