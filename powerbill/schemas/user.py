"""Pydantic schemas for back-office users."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from powerbill.schemas.common import PaginatedResponse
from powerbill.utils.status import PermissionAction, UserRole, UserStatus, as_label, from_label


class PermissionSchema(BaseModel):
    id: str
    name: str
    resource: str
    action: PermissionAction
    granted: bool = True


class PermissionResponse(BaseModel):
    id: str
    name: str
    resource: str
    action: str
    granted: bool = True

    @field_validator("action", mode="before")
    @classmethod
    def _action_label(cls, v):
        return as_label(PermissionAction, v)


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = UserRole.viewer
    permissions: list[PermissionSchema] = Field(default_factory=list)
    is_active: UserStatus = UserStatus.active
    department: str | None = None


class UserUpdate(BaseModel):
    """Fields an administrator may change; passwords are not updated here."""

    email: EmailStr | None = None
    role: UserRole | None = None
    permissions: list[PermissionSchema] | None = None
    is_active: UserStatus | None = None
    department: str | None = None

    @field_validator("role", mode="before")
    @classmethod
    def _role_code(cls, v):
        return from_label(UserRole, v)

    @field_validator("is_active", mode="before")
    @classmethod
    def _is_active_code(cls, v):
        return from_label(UserStatus, v)


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash."""

    id: str
    username: str
    email: str
    role: str
    is_active: str
    permissions: list[PermissionResponse] = Field(default_factory=list)
    department: str | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("role", mode="before")
    @classmethod
    def _role_label(cls, v):
        return as_label(UserRole, v)

    @field_validator("is_active", mode="before")
    @classmethod
    def _is_active_label(cls, v):
        return as_label(UserStatus, v)


class UserListResponse(PaginatedResponse):
    items: list[UserResponse]
