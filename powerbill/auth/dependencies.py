"""Authentication and role-check dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError

from powerbill.auth.security import decode_token
from powerbill.schemas.auth import TokenUser
from powerbill.utils.status import UserRole

_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> TokenUser:
    """Resolve the caller from the bearer access token (claims only, no DB hit)."""
    if credentials is None:
        raise _unauthorized("Access token is required")

    try:
        payload = decode_token(credentials.credentials)
    except ExpiredSignatureError as err:
        raise _unauthorized("Token has expired") from err
    except JWTError as err:
        raise _unauthorized("Invalid or expired token") from err

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or not isinstance(role, int):
        raise _unauthorized("Invalid token claims")

    return TokenUser(
        id=user_id,
        username=payload.get("username", ""),
        role=role,
        email=payload.get("email", ""),
    )


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]


def require_role(*roles: UserRole):
    """Dependency factory allowing only the given roles.

    Usage::

        @router.post("", dependencies=[Depends(require_role(UserRole.admin))])
    """
    allowed = {int(role) for role in roles}

    async def _check(current_user: CurrentUser) -> TokenUser:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _check
