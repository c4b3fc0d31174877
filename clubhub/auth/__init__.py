"""
Authentication Module
Password hashing and JWT token management
"""

from clubhub.auth.password import hash_password, verify_password
from clubhub.auth.dependencies import (
    create_access_token,
    create_user_token,
    decode_access_token,
    get_current_user,
    get_optional_user,
    get_student,
    get_club_admin
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "get_student",
    "get_club_admin",
]
