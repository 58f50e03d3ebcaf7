"""SQLAlchemy Transaction Manager implementation."""

import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.application.shared import TransactionManager
from user_service.infrastructure.persistence.sqlalchemy.context import SQLAlchemyContext

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")


class SQLAlchemyTransactionManager(TransactionManager[SQLAlchemyContext]):
    """SQLAlchemy implementation of TransactionManager.

    Відповідальності:
    - Нова AsyncSession на кожен transaction() call
    - Commit після успішного fn
    - Automatic rollback при будь-якому exception (включно з CancelledError)
    - Session cleanup завжди

    Example:
        >>> session_factory = async_sessionmaker(engine, expire_on_commit=False)
        >>> tm = SQLAlchemyTransactionManager(session_factory)
        >>>
        >>> async def _rename(ctx):
        ...     return await user_repo.update_partial(ctx, user_id, UserUpdate(name="Jane"))
        >>>
        >>> result = await tm.transaction(_rename)  # Single commit!
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize transaction manager.

        Args:
            session_factory: SQLAlchemy async session factory.
        """
        self._session_factory = session_factory

    async def transaction(
        self, fn: Callable[[SQLAlchemyContext], Awaitable[TResult]]
    ) -> TResult:
        """Run fn in one session/transaction.

        Args:
            fn: Async callable receiving SQLAlchemyContext.

        Returns:
            fn result, after commit.

        Raises:
            BaseException: Whatever fn (or commit) raised, after rollback.
        """
        session = self._session_factory()
        logger.debug("transaction.started")

        try:
            result = await fn(SQLAlchemyContext(session=session))
            await session.commit()
            logger.debug("transaction.committed")
            return result
        except BaseException as e:
            # Exception occurred (or task cancelled) - rollback transaction
            await session.rollback()
            logger.warning(
                "transaction.rolled_back",
                extra={"exception_type": type(e).__name__},
            )
            raise
        finally:
            # Always close session (cleanup)
            await session.close()
            logger.debug("transaction.closed")


# Factory function для dependency injection
def create_transaction_manager(
    session_factory: async_sessionmaker[AsyncSession],
) -> SQLAlchemyTransactionManager:
    """Factory для створення TransactionManager.

    Example:
        >>> engine = create_async_engine("postgresql+asyncpg://...")
        >>> session_factory = async_sessionmaker(engine, expire_on_commit=False)
        >>> tm = create_transaction_manager(session_factory)
    """
    return SQLAlchemyTransactionManager(session_factory)
