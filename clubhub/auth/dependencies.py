"""
Authentication Dependencies
JWT token handling and user authentication
"""

import logging
from datetime import timedelta
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from clubhub.clock import utcnow
from clubhub.config import settings
from clubhub.database import database, as_dict
from clubhub.errors import AuthorizationError

logger = logging.getLogger(__name__)

# Security schemes
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

# Columns of the users table that are safe to hand to route handlers
USER_COLUMNS = "id, name, email, role, roll_number, department, club_name, created_at"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token

    Args:
        data: Data to encode in token
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(hours=settings.JWT_EXPIRATION_HOURS)

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )

    return encoded_jwt


def create_user_token(user: dict) -> str:
    """Token payload carries the identity plus role and club for quick checks"""
    return create_access_token({
        "user_id": str(user["id"]),
        "email": user["email"],
        "role": user["role"],
        "club_name": user.get("club_name"),
    })


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token

    Raises:
        HTTPException: If token is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def load_user(token: str) -> dict:
    """Resolve a bearer token to the current user row"""
    payload = decode_access_token(token)
    user_id = payload.get("user_id")

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )

    user = await database.fetch_one(
        f"SELECT {USER_COLUMNS} FROM users WHERE id = :id",
        {"id": str(user_id)}
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    user = as_dict(user)
    user["id"] = str(user["id"])
    return user


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    """
    Get current authenticated user from JWT token

    The user row is loaded on every request so deleted accounts and
    stale role claims are not trusted.
    """
    return await load_user(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> Optional[dict]:
    """Current user when a token is sent, None for anonymous visitors"""
    if credentials is None:
        return None
    return await load_user(credentials.credentials)


async def get_student(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Require student authentication

    Raises:
        AuthorizationError: If user is not a student
    """
    if current_user["role"] != "student":
        logger.warning("Student-only action refused for user %s", current_user["id"])
        raise AuthorizationError("Not authorized. Student access required.")

    return current_user


async def get_club_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Require club admin authentication

    Raises:
        AuthorizationError: If user is not a club admin
    """
    if current_user["role"] != "club_admin":
        logger.warning("Admin-only action refused for user %s", current_user["id"])
        raise AuthorizationError("Not authorized. Club admin access required.")

    return current_user
