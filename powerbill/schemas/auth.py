"""Pydantic schemas for authentication."""

from pydantic import BaseModel, Field

from powerbill.utils.status import UserRole, label_for


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class TokenUser(BaseModel):
    """Identity carried by a verified access token."""

    id: str
    username: str
    role: int
    email: str = ""

    @property
    def role_label(self) -> str:
        return label_for(UserRole, self.role)


class MeResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str

    @classmethod
    def from_token_user(cls, user: TokenUser) -> "MeResponse":
        return cls(id=user.id, username=user.username, email=user.email, role=user.role_label)
