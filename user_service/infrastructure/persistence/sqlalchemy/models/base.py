"""Declarative base with a constraint naming convention.

Constraint names are deterministic, so the repository can recognize
`uq_users_email` in IntegrityError messages and Alembic migrations use the
same names as the ORM metadata.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}


class Base(DeclarativeBase):
    """Base class для ORM models (SQLAlchemy 2.0 declarative)."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
