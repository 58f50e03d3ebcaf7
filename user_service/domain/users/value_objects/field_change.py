"""FieldChange - one entry of a change record."""

from dataclasses import dataclass

from user_service.domain.shared import ValueObject


@dataclass(frozen=True)
class FieldChange(ValueObject):
    """Stringified before/after values of a single field."""

    old: str
    new: str

    def to_dict(self) -> dict[str, str]:
        return {"old": self.old, "new": self.new}


# field name → change, e.g. {"age": FieldChange(old="30", new="null")}
ChangeRecord = dict[str, FieldChange]
