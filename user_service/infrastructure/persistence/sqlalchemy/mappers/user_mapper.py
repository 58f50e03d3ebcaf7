"""UserMapper - converts between User entity and UserModel ORM.

Mapper pattern: Domain entity ↔ ORM model conversion.
Це дозволяє зберігати domain layer чистим від SQLAlchemy.
"""

from datetime import datetime, timezone

from user_service.domain.users.entities import CreateUser, User
from user_service.infrastructure.persistence.sqlalchemy.models.user_model import UserModel


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserMapper:
    """Mapper для User entity ↔ UserModel ORM.

    Example:
        >>> mapper = UserMapper()
        >>>
        >>> # Domain → ORM
        >>> model = mapper.to_model(create_user)
        >>> session.add(model)
        >>>
        >>> # ORM → Domain
        >>> model = await session.get(UserModel, user_id)
        >>> user = mapper.to_entity(model)
    """

    def to_entity(self, model: UserModel) -> User:
        """Convert UserModel (ORM) → User (domain entity)."""
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            age=model.age,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def to_model(self, entity: CreateUser) -> UserModel:
        """Convert CreateUser (insert payload) → UserModel (ORM)."""
        return UserModel(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            age=entity.age,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def update_model(self, entity: User, model: UserModel) -> None:
        """Copy the mutable fields of entity onto an existing model.

        id and created_at are never overwritten.
        """
        model.email = entity.email
        model.name = entity.name
        model.age = entity.age
        model.updated_at = entity.updated_at
