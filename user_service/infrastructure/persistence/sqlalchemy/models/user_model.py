"""User ORM Model - SQLAlchemy mapping для User aggregate."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class UserModel(Base):
    """ORM model для User aggregate.

    Це ТІЛЬКИ для персистенції - БЕЗ business logic!
    Business rules live in domain.users.services.validators.
    """

    __tablename__ = "users"

    # Primary key (UUID4 string, generated by UserService)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Identity
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        # Authoritative backstop for the application-level email check
        UniqueConstraint("email", name="uq_users_email"),
        # List queries (newest first)
        Index("ix_users_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"
