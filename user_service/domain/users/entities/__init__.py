"""Entities для Users bounded context."""

from .user import CreateUser, User

__all__ = ["User", "CreateUser"]
