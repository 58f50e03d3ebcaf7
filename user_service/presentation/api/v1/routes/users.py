"""Users API routes - CRUD over the User aggregate."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response, status

from user_service.domain.shared import NotFoundError
from user_service.presentation.api.dependencies import UserServiceDep
from user_service.presentation.api.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    create_paginated_response,
    page_to_limit_offset,
)
from user_service.presentation.api.v1.schemas import (
    CreateUserRequest,
    ErrorResponse,
    PaginatedUserResponse,
    PatchUserRequest,
    UserResponse,
)

# Create router
router = APIRouter(prefix="/users", tags=["Users"])

UserIdPath = Annotated[str, Path(description="User ID (UUID)")]


# ============================================================================
# LIST USERS
# ============================================================================


@router.get(
    "",
    response_model=PaginatedUserResponse,
    summary="List users",
    description="Page through users, newest first.",
    responses={400: {"model": ErrorResponse}},
)
async def list_users(
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    page_size: Annotated[
        int, Query(alias="pageSize", ge=1, le=MAX_PAGE_SIZE)
    ] = DEFAULT_PAGE_SIZE,
) -> PaginatedUserResponse:
    """List users (page/pageSize → limit/offset)."""
    limit, offset = page_to_limit_offset(page, page_size)
    users, total = await service.list_users(limit=limit, offset=offset)

    return PaginatedUserResponse.model_validate(
        create_paginated_response(
            [UserResponse.from_entity(user) for user in users],
            page=page,
            page_size=page_size,
            total=total,
        )
    )


# ============================================================================
# CREATE USER
# ============================================================================


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="""
    Create a user and publish `user.created`.

    **Returns**:
    - 201: User created
    - 400: Invalid request (bad email, empty name, age out of range)
    - 409: Email already in use
    """,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_user(
    request: CreateUserRequest,
    service: UserServiceDep,
) -> UserResponse:
    """Create user."""
    user = await service.create_user(
        email=request.email,
        name=request.name,
        age=request.age,
    )
    return UserResponse.from_entity(user)


# ============================================================================
# GET USER
# ============================================================================


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
    responses={404: {"model": ErrorResponse}},
)
async def get_user(user_id: UserIdPath, service: UserServiceDep) -> UserResponse:
    """Get user by ID."""
    user = await service.get_user(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return UserResponse.from_entity(user)


# ============================================================================
# PATCH USER
# ============================================================================


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Partially update user",
    description="""
    Update only the provided fields and publish `user.updated` with the
    changed fields. Sending values equal to the stored ones is a no-op
    (no event, `updatedAt` unchanged).

    `age` may be `null` to clear it; `email` and `name` may not.

    **Returns**:
    - 200: Updated (or unchanged) user
    - 400: Empty body or invalid field
    - 404: User not found
    - 409: Email already in use by another user
    """,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def patch_user(
    user_id: UserIdPath,
    request: PatchUserRequest,
    service: UserServiceDep,
) -> UserResponse:
    """Partially update user."""
    update = request.to_update()
    user = await service.patch_user(
        user_id,
        email=update.email,
        name=update.name,
        age=update.age,
    )
    return UserResponse.from_entity(user)


# ============================================================================
# DELETE USER
# ============================================================================


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    responses={404: {"model": ErrorResponse}},
)
async def delete_user(user_id: UserIdPath, service: UserServiceDep) -> Response:
    """Delete user."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
