"""User administration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from powerbill.auth.dependencies import get_current_user, require_role
from powerbill.dependencies import UserRepo
from powerbill.filters import FilterDepends, FilterResult
from powerbill.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from powerbill.utils.audit import audit_logged
from powerbill.utils.status import UserRole

router = APIRouter(dependencies=[Depends(get_current_user)])

_MANAGERS = (UserRole.admin, UserRole.manager)


@router.get(
    "",
    response_model=UserListResponse,
    dependencies=[Depends(require_role(*_MANAGERS))],
)
async def list_users(
    repo: UserRepo,
    filters: FilterResult = FilterDepends("users"),
) -> UserListResponse:
    users, total = await repo.get_all(filters)
    return UserListResponse.from_filter_result(
        items=[UserResponse.model_validate(u) for u in users],
        total=total,
        result=filters,
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, repo: UserRepo) -> UserResponse:
    user = await repo.get_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.admin)), Depends(audit_logged("create_user"))],
)
async def create_user(data: UserCreate, repo: UserRepo) -> UserResponse:
    existing = await repo.get_by_username(data.username)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )
    user = await repo.create(data)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    dependencies=[Depends(require_role(*_MANAGERS)), Depends(audit_logged("update_user"))],
)
async def update_user(user_id: str, data: UserUpdate, repo: UserRepo) -> UserResponse:
    """Update a user's profile, role or permissions. Passwords are not changed here."""
    user = await repo.update(user_id, data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.model_validate(user)
