"""JWT token and password hashing utilities."""

from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt
from jose import jwt

from powerbill.config import get_settings

TokenType = Literal["access", "refresh"]


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def _create_token(
    token_type: TokenType,
    expire_minutes: int,
    user_id: str,
    role: int,
    username: str,
    email: str,
) -> str:
    settings = get_settings()
    payload = {
        "sub": user_id,
        "role": int(role),
        "username": username,
        "email": email,
        "type": token_type,
        "exp": datetime.now(UTC) + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, role: int, username: str = "", email: str = "") -> str:
    """Create a short-lived JWT access token."""
    minutes = get_settings().jwt_access_token_expire_minutes
    return _create_token("access", minutes, user_id, role, username, email)


def create_refresh_token(user_id: str, role: int, username: str = "", email: str = "") -> str:
    """Create a long-lived JWT refresh token."""
    minutes = get_settings().jwt_refresh_token_expire_minutes
    return _create_token("refresh", minutes, user_id, role, username, email)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token. Raises JWTError on failure."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
