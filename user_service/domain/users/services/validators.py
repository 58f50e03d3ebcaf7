"""Request validators для User use cases.

Async predicate checks run by UserService inside its transaction, before any
write. Each validator either returns quietly (or returns the loaded user) or
raises a domain exception.
"""

from user_service.domain.shared import (
    UNSET,
    DuplicateError,
    NotFoundError,
    RequiredOrUnset,
    ValidationError,
)
from user_service.domain.users.entities import User
from user_service.domain.users.repositories import TContext, UserRepository

USER_ENTITY_TYPE = "User"

MAX_NAME_LENGTH = 255


def validate_name(name: RequiredOrUnset[str]) -> None:
    """Name must be non-empty after trimming and at most MAX_NAME_LENGTH chars.

    UNSET is skipped.

    Raises:
        ValidationError: field="name".
    """
    if name is UNSET:
        return

    if not name.strip():
        raise ValidationError("Name cannot be empty", field="name")

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Name cannot exceed {MAX_NAME_LENGTH} characters", field="name"
        )


async def validate_email_not_duplicate(
    *,
    user_repository: UserRepository[TContext],
    ctx: TContext,
    email: RequiredOrUnset[str],
    current_email: str | None = None,
) -> None:
    """Email must not belong to another user.

    Skipped when email is UNSET or equals current_email (re-sending your own
    email is a no-op, not a conflict).

    Raises:
        DuplicateError: If another user holds the email.
    """
    if email is UNSET or email == current_email:
        return

    existing = await user_repository.get_by_email(ctx, email)
    if existing is not None:
        raise DuplicateError(f"User with email {email} already exists", email=email)


async def validate_user_exists(
    *,
    user_repository: UserRepository[TContext],
    ctx: TContext,
    user_id: str,
) -> User:
    """Load user or raise NotFoundError("User", user_id)."""
    user = await user_repository.get_by_id(ctx, user_id)
    if user is None:
        raise NotFoundError(USER_ENTITY_TYPE, user_id)
    return user


async def validate_create_user_request(
    *,
    user_repository: UserRepository[TContext],
    ctx: TContext,
    email: str,
    name: str,
) -> None:
    """Validate create: non-empty name, unused email.

    Raises:
        ValidationError: Empty name.
        DuplicateError: Email already taken.
    """
    validate_name(name)
    await validate_email_not_duplicate(
        user_repository=user_repository, ctx=ctx, email=email
    )


async def validate_patch_user_request(
    *,
    user_repository: UserRepository[TContext],
    ctx: TContext,
    user_id: str,
    email: RequiredOrUnset[str],
    name: RequiredOrUnset[str],
) -> User:
    """Validate patch and return the current (pre-write) user.

    Raises:
        NotFoundError: User absent.
        ValidationError: Empty name.
        DuplicateError: Email taken by another user.
    """
    user = await validate_user_exists(
        user_repository=user_repository, ctx=ctx, user_id=user_id
    )

    validate_name(name)

    await validate_email_not_duplicate(
        user_repository=user_repository,
        ctx=ctx,
        email=email,
        current_email=user.email,
    )

    return user


async def validate_delete_user_request(
    *,
    user_repository: UserRepository[TContext],
    ctx: TContext,
    user_id: str,
) -> User:
    """Validate delete: the user must exist."""
    return await validate_user_exists(
        user_repository=user_repository, ctx=ctx, user_id=user_id
    )
