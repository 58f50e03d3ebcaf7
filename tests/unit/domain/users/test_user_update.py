"""Tests для UserUpdate (tri-state partial update) та UNSET."""

import pytest

from user_service.domain.shared import UNSET, ValidationError, is_set
from user_service.domain.users.value_objects import UserUpdate


class TestUnset:
    """Tests для UNSET sentinel."""

    def test_unset_is_not_none(self):
        assert UNSET is not None
        assert is_set(None) is True
        assert is_set(UNSET) is False

    def test_unset_is_falsy(self):
        assert not UNSET

    def test_unset_repr(self):
        assert repr(UNSET) == "UNSET"


class TestUserUpdate:
    """Tests для UserUpdate value object."""

    def test_defaults_are_unset(self):
        # Act
        update = UserUpdate()

        # Assert
        assert update.email is UNSET
        assert update.name is UNSET
        assert update.age is UNSET
        assert update.is_empty is True

    def test_provided_fields_include_explicit_none(self):
        # Act
        update = UserUpdate(name="Jane", age=None)

        # Assert
        assert update.provided_fields() == {"name": "Jane", "age": None}
        assert update.is_empty is False

    @pytest.mark.parametrize("field_name", ["email", "name"])
    def test_null_for_required_field_rejected(self, field_name):
        """Test: email/name не можуть бути null."""
        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            UserUpdate(**{field_name: None})

        assert exc_info.value.field == field_name

    def test_is_immutable(self):
        # Arrange
        update = UserUpdate(name="Jane")

        # Act & Assert
        with pytest.raises(AttributeError):
            update.name = "John"  # type: ignore[misc]
