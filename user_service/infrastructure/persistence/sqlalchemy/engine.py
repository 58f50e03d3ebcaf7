"""Engine and session factory construction from Settings."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from user_service.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async engine with the pool configured from settings.

    Example:
        >>> engine = create_engine(get_settings())
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory (expire_on_commit=False - важливо для async)."""
    return async_sessionmaker(engine, expire_on_commit=False)
