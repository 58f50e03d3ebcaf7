"""Repository implementations for SQLAlchemy."""

from .user_repository import SQLAlchemyUserRepository

__all__ = ["SQLAlchemyUserRepository"]
