"""
Account Request/Response Models
"""

from pydantic import EmailStr, Field, model_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, ClubName, UserRole


class RegisterRequest(CamelModel):
    """Sign-up request for students and club admins"""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole
    roll_number: Optional[str] = Field(default=None, max_length=50)
    department: Optional[str] = Field(default=None, max_length=100)
    club_name: Optional[ClubName] = None

    @model_validator(mode="after")
    def check_role_fields(self):
        # Exactly one profile field set per role; the other is discarded
        if self.role == UserRole.STUDENT:
            if not self.roll_number:
                raise ValueError("Roll number is required for students")
            if not self.department:
                raise ValueError("Department is required for students")
            self.club_name = None
        else:
            if self.club_name is None:
                raise ValueError("Club name is required for club admins")
            self.roll_number = None
            self.department = None
        return self


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserPublic(CamelModel):
    """User details safe to return to clients"""
    id: UUID
    name: str
    email: str
    role: UserRole
    roll_number: Optional[str] = None
    department: Optional[str] = None
    club_name: Optional[ClubName] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserPublic
