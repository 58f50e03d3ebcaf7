"""Transaction context handed to SQLAlchemy repositories."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class SQLAlchemyContext:
    """One open session = one transaction.

    Created by SQLAlchemyTransactionManager; repositories only ever use
    ctx.session and never commit or roll it back themselves.
    """

    session: AsyncSession
