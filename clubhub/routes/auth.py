"""
Authentication Routes
Sign-up, login and current-user endpoints
"""

from fastapi import APIRouter, Depends, status
from clubhub.auth import get_current_user
from clubhub.schemas.user import RegisterRequest, LoginRequest, AuthResponse, UserPublic
from clubhub.services.user_service import user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Create a student or club admin account

    - **role**: `student` (needs rollNumber and department) or `club_admin` (needs clubName)

    Returns: JWT token and the public user profile
    """
    return await user_service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginRequest):
    """Login for students and club admins"""
    return await user_service.login(credentials)


@router.get("/me", response_model=UserPublic)
async def me(current_user: dict = Depends(get_current_user)):
    """Profile of the signed-in user"""
    return current_user
