"""Tests для users table metadata."""

from sqlalchemy import UniqueConstraint

from user_service.infrastructure.persistence.sqlalchemy import Base, UserModel


class TestUserTableConstraints:
    """Constraint names match the migration and the repository's checks."""

    def test_primary_key_named_by_convention(self):
        assert UserModel.__table__.primary_key.name == "pk_users"

    def test_email_unique_constraint(self):
        table = UserModel.__table__

        unique = [c for c in table.constraints if isinstance(c, UniqueConstraint)]

        assert [c.name for c in unique] == ["uq_users_email"]
        assert [col.name for col in unique[0].columns] == ["email"]

    def test_created_at_index(self):
        indexes = {index.name for index in UserModel.__table__.indexes}

        assert indexes == {"ix_users_created_at"}

    def test_naming_convention_on_metadata(self):
        assert Base.metadata.naming_convention["uq"] == "uq_%(table_name)s_%(column_0_name)s"
