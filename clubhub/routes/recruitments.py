"""
Recruitment Routes
Recruitment drives and student applications to them
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from clubhub.auth import get_club_admin, get_student
from clubhub.schemas.common import ClubName, MessageResponse
from clubhub.schemas.recruitment import (
    CreateRecruitmentRequest,
    UpdateRecruitmentRequest,
    RecruitmentResponse,
    RecruitmentListResponse,
)
from clubhub.schemas.application import ClubApplicationRequest, ApplicationResponse, ApplicationListResponse
from clubhub.services.recruitment_service import recruitment_service
from clubhub.services.application_service import application_service

router = APIRouter()


@router.get("", response_model=RecruitmentListResponse)
async def list_recruitments(
    club_name: Optional[ClubName] = Query(None, alias="clubName"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100)
):
    """Active recruitments, closest deadline first"""
    return await recruitment_service.list_recruitments(
        club_name=club_name.value if club_name else None,
        page=page,
        limit=limit
    )


@router.post("", response_model=RecruitmentResponse, status_code=status.HTTP_201_CREATED)
async def create_recruitment(
    request: CreateRecruitmentRequest,
    current_admin: dict = Depends(get_club_admin)
):
    """
    Open a recruitment for the admin's club (Club Admin only)

    - **positions**: defaults to one position named after the title
    - **questions**: custom questions; options are kept for select/multiselect only
    - **applicationDeadline**: defaults to 30 days from now
    """
    return await recruitment_service.create_recruitment(current_admin, request)


@router.get("/club/{club_name}", response_model=List[RecruitmentResponse])
async def list_club_recruitments(club_name: ClubName):
    return await recruitment_service.list_club_recruitments(club_name.value)


@router.get("/{recruitment_id}", response_model=RecruitmentResponse)
async def get_recruitment(recruitment_id: UUID):
    return await recruitment_service.get_recruitment(recruitment_id)


@router.put("/{recruitment_id}", response_model=RecruitmentResponse)
async def update_recruitment(
    recruitment_id: UUID,
    request: UpdateRecruitmentRequest,
    current_admin: dict = Depends(get_club_admin)
):
    return await recruitment_service.update_recruitment(current_admin, recruitment_id, request)


@router.delete("/{recruitment_id}", response_model=MessageResponse)
async def delete_recruitment(
    recruitment_id: UUID,
    current_admin: dict = Depends(get_club_admin)
):
    """Deactivate a recruitment; applications are kept"""
    await recruitment_service.delete_recruitment(current_admin, recruitment_id)
    return {"message": "Recruitment deleted successfully"}


@router.post(
    "/{recruitment_id}/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED
)
async def apply_to_recruitment(
    recruitment_id: UUID,
    request: ClubApplicationRequest,
    current_student: dict = Depends(get_student)
):
    """
    Submit an application

    - 400: deadline passed, unknown position, already applied, or answers
      rejected (`missing` lists unanswered required questions)
    - 404: recruitment missing or inactive
    """
    return await application_service.apply_to_recruitment(current_student, recruitment_id, request)


@router.get("/{recruitment_id}/applications", response_model=ApplicationListResponse)
async def list_recruitment_applications(
    recruitment_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    current_admin: dict = Depends(get_club_admin)
):
    return await application_service.list_recruitment_applications(
        current_admin, recruitment_id, page, limit
    )
