"""SQLAlchemy persistence layer."""

from .context import SQLAlchemyContext
from .engine import create_engine, create_session_factory
from .models import Base, UserModel
from .repositories import SQLAlchemyUserRepository
from .transaction_manager import (
    SQLAlchemyTransactionManager,
    create_transaction_manager,
)

__all__ = [
    # ORM Models
    "Base",
    "UserModel",
    # Engine
    "create_engine",
    "create_session_factory",
    # Repositories
    "SQLAlchemyUserRepository",
    # Transactions
    "SQLAlchemyContext",
    "SQLAlchemyTransactionManager",
    "create_transaction_manager",
]
