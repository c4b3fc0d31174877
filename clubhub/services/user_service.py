"""
User Service
Account sign-up and login for students and club admins
"""

import logging
from uuid import uuid4

from clubhub.auth import hash_password, verify_password, create_user_token
from clubhub.clock import utcnow
from clubhub.database import database, as_dict, INTEGRITY_ERRORS, is_unique_violation
from clubhub.errors import NotFoundError, PolicyRejection, RejectionReason, ValidationError
from clubhub.schemas.user import RegisterRequest, LoginRequest

logger = logging.getLogger(__name__)

PUBLIC_COLUMNS = "id, name, email, role, roll_number, department, club_name, created_at"


class UserService:
    """Service for account operations"""

    @staticmethod
    async def get_user(user_id: str) -> dict:
        user = await database.fetch_one(
            f"SELECT {PUBLIC_COLUMNS} FROM users WHERE id = :id",
            {"id": str(user_id)}
        )
        if not user:
            raise NotFoundError("User not found")
        return as_dict(user)

    @staticmethod
    async def register(data: RegisterRequest) -> dict:
        """
        Create an account and sign it in

        Students need a unique roll number and a department, admins a club.
        """
        email = data.email.lower()

        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email",
            {"email": email}
        )
        if existing:
            raise PolicyRejection(RejectionReason.ALREADY_EXISTS, "User already exists with this email")

        if data.roll_number:
            taken = await database.fetch_one(
                "SELECT id FROM users WHERE roll_number = :roll_number",
                {"roll_number": data.roll_number}
            )
            if taken:
                raise PolicyRejection(RejectionReason.ALREADY_EXISTS, "Roll number already exists")

        user_id = str(uuid4())
        now = utcnow()

        try:
            await database.execute(
                """
                INSERT INTO users (
                    id, name, email, password_hash, role, roll_number, department, club_name,
                    created_at, updated_at
                )
                VALUES (
                    :id, :name, :email, :password_hash, :role, :roll_number, :department, :club_name,
                    :now, :now
                )
                """,
                {
                    "id": user_id,
                    "name": data.name.strip(),
                    "email": email,
                    "password_hash": hash_password(data.password),
                    "role": data.role.value,
                    "roll_number": data.roll_number,
                    "department": data.department,
                    "club_name": data.club_name.value if data.club_name else None,
                    "now": now,
                }
            )
        except INTEGRITY_ERRORS as exc:
            if not is_unique_violation(exc):
                raise
            raise PolicyRejection(RejectionReason.ALREADY_EXISTS, "User already exists with this email")

        user = await UserService.get_user(user_id)
        logger.info("Registered %s account %s", data.role.value, user_id)

        return {
            "message": "User registered successfully",
            "token": create_user_token(user),
            "user": user,
        }

    @staticmethod
    async def login(data: LoginRequest) -> dict:
        """Exchange email and password for a token"""

        row = await database.fetch_one(
            f"SELECT {PUBLIC_COLUMNS}, password_hash FROM users WHERE email = :email",
            {"email": data.email.lower()}
        )

        user = as_dict(row)
        if not user or not verify_password(data.password, user.pop("password_hash")):
            logger.info("Failed login for %s", data.email)
            raise ValidationError("Invalid email or password")

        return {
            "message": "Login successful",
            "token": create_user_token(user),
            "user": user,
        }


# Create singleton instance
user_service = UserService()
