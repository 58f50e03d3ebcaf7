"""Pydantic schemas for Users API requests/responses."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from user_service.domain.shared import UNSET
from user_service.domain.users.entities import User
from user_service.domain.users.value_objects import UserUpdate

# Pragmatic address check: local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_AGE = 0
MAX_AGE = 125


def _validate_email(v: str) -> str:
    if not EMAIL_PATTERN.match(v):
        raise ValueError("email must be a valid email address")
    return v


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================


class CreateUserRequest(BaseModel):
    """Request schema для створення user.

    Example:
        {
            "email": "jane@example.com",
            "name": "Jane",
            "age": 30
        }
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "jane@example.com", "name": "Jane", "age": 30}
        }
    )

    email: str = Field(..., description="Unique email address", max_length=320)
    name: str = Field(..., description="Display name", min_length=1, max_length=255)
    age: int | None = Field(
        default=None, description="Age (0-125)", ge=MIN_AGE, le=MAX_AGE, strict=True
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        return _validate_email(v)


class PatchUserRequest(BaseModel):
    """Request schema для partial update.

    Absent field = leave alone; "age": null = clear age. At least one field
    is required, and email/name cannot be null.

    Example:
        {"name": "Jane Doe", "age": null}
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Jane Doe", "age": None}}
    )

    email: str | None = Field(default=None, max_length=320)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    age: int | None = Field(default=None, ge=MIN_AGE, le=MAX_AGE, strict=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        """Validate email format (null rejected in validate_presence)."""
        if v is None:
            return v
        return _validate_email(v)

    @model_validator(mode="after")
    def validate_presence(self) -> "PatchUserRequest":
        """At least one field; only age may be null."""
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")

        for field_name in ("email", "name"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")

        return self

    def to_update(self) -> UserUpdate:
        """Convert to tri-state UserUpdate (unsent fields → UNSET)."""
        provided = self.model_fields_set
        return UserUpdate(
            email=self.email if "email" in provided else UNSET,
            name=self.name if "name" in provided else UNSET,
            age=self.age if "age" in provided else UNSET,
        )


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================


class UserResponse(BaseModel):
    """Response schema для User (camelCase on the wire).

    Example:
        {
            "id": "5f0c7c1e-...",
            "email": "jane@example.com",
            "name": "Jane",
            "age": null,
            "createdAt": "2026-01-15T10:30:00+00:00",
            "updatedAt": "2026-01-15T10:30:00+00:00"
        }
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    name: str
    age: int | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            age=user.age,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class PaginatedUserResponse(BaseModel):
    """Page of users."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[UserResponse]
    page: int
    page_size: int
    total: int
    total_pages: int


class ValidationErrorDetail(BaseModel):
    """One request validation failure."""

    path: str
    message: str
    code: str


class ErrorResponse(BaseModel):
    """Error response schema."""

    model_config = ConfigDict(extra="allow")

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    errors: list[ValidationErrorDetail] | None = None
