"""SQLAlchemy ORM models."""

from .base import Base
from .user_model import UserModel

__all__ = [
    "Base",
    "UserModel",
]
