"""
Application Routes
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Query
from clubhub.auth import get_club_admin, get_student
from clubhub.schemas.application import (
    ApplicationResponse,
    ApplicationListResponse,
    UpdateApplicationStatusRequest,
)
from clubhub.services.application_service import application_service

router = APIRouter()


@router.get("/my", response_model=ApplicationListResponse)
async def my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_student: dict = Depends(get_student)
):
    """The signed-in student's applications"""
    return await application_service.list_my_applications(current_student, page, limit)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: UUID,
    request: UpdateApplicationStatusRequest,
    current_admin: dict = Depends(get_club_admin)
):
    """
    Review an application (admin of the recruitment's club)

    - **status**: applied, under_review, shortlisted, selected or rejected
    - **feedback** / **interviewDate**: optional, written with the status
    """
    return await application_service.update_application_status(current_admin, application_id, request)
