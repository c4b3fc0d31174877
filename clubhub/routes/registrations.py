"""
Registration Routes
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Query
from clubhub.auth import get_club_admin, get_student
from clubhub.schemas.registration import (
    RegistrationResponse,
    RegistrationListResponse,
    UpdateRegistrationStatusRequest,
)
from clubhub.services.registration_service import registration_service

router = APIRouter()


@router.get("/events/my", response_model=RegistrationListResponse)
async def my_registrations(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_student: dict = Depends(get_student)
):
    """The signed-in student's live registrations for active events"""
    return await registration_service.list_my_registrations(current_student, page, limit)


@router.patch("/{registration_id}/status", response_model=RegistrationResponse)
async def update_registration_status(
    registration_id: UUID,
    request: UpdateRegistrationStatusRequest,
    current_admin: dict = Depends(get_club_admin)
):
    """Mark a registration confirmed, attended or cancelled (owning club admin)"""
    return await registration_service.update_registration_status(
        current_admin, registration_id, request.status
    )
