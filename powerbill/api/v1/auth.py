"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from jose import JWTError

from powerbill.auth.dependencies import CurrentUser
from powerbill.auth.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from powerbill.config import get_settings
from powerbill.dependencies import UserRepo
from powerbill.schemas.auth import MeResponse, RefreshRequest, TokenResponse
from powerbill.schemas.common import MessageResponse
from powerbill.utils.logging import get_logger
from powerbill.utils.rate_limit import limiter
from powerbill.utils.status import UserStatus

logger = get_logger(__name__)

router = APIRouter()


def _issue_tokens(user) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(
            user.id, user.role, username=user.username, email=user.email
        ),
        refresh_token=create_refresh_token(
            user.id, user.role, username=user.username, email=user.email
        ),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(lambda: get_settings().login_rate_limit)
async def login(
    request: Request,
    repo: UserRepo,
    form_data: OAuth2PasswordRequestForm = Depends(),  # pyright: ignore[reportCallInDefaultInitializer]
) -> TokenResponse:
    """Authenticate a user and return JWT tokens."""
    user = await repo.get_by_username(form_data.username)

    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.info("Failed login for username=%s", form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.is_active != UserStatus.active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is inactive",
        )

    await repo.record_login(user)
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(body: RefreshRequest, repo: UserRepo) -> TokenResponse:
    """Exchange a refresh token for a new token pair."""
    try:
        payload = decode_token(body.refresh_token)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        ) from err

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
        )

    user_id: str | None = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing subject",
        )

    user = await repo.get_by_id(user_id)
    if not user or user.is_active != UserStatus.active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )

    return _issue_tokens(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: CurrentUser) -> MessageResponse:
    """Tokens are stateless; the client discards them."""
    logger.info("User %s logged out", current_user.username)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(current_user: CurrentUser) -> MeResponse:
    """Return the authenticated user's identity."""
    return MeResponse.from_token_user(current_user)
