"""Value Objects для Users bounded context."""

from .field_change import ChangeRecord, FieldChange
from .user_update import UserUpdate

__all__ = ["UserUpdate", "FieldChange", "ChangeRecord"]
