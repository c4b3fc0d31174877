"""
Club Admin Routes
Reporting endpoints scoped to the admin's own club
"""

from fastapi import APIRouter, Depends
from clubhub.auth import get_club_admin
from clubhub.schemas.admin import ClubStatsResponse, ClubApplicationsResponse, ClubRegistrationsResponse
from clubhub.schemas.common import ClubName
from clubhub.services.admin_service import admin_service

router = APIRouter()


@router.get("/stats/{club_name}", response_model=ClubStatsResponse)
async def get_club_stats(
    club_name: ClubName,
    current_admin: dict = Depends(get_club_admin)
):
    """Club admin dashboard stats"""
    return await admin_service.get_club_stats(current_admin, club_name)


@router.get("/applications/{club_name}", response_model=ClubApplicationsResponse)
async def list_club_applications(
    club_name: ClubName,
    current_admin: dict = Depends(get_club_admin)
):
    return await admin_service.list_club_applications(current_admin, club_name)


@router.get("/event-registrations/{club_name}", response_model=ClubRegistrationsResponse)
async def list_club_event_registrations(
    club_name: ClubName,
    current_admin: dict = Depends(get_club_admin)
):
    return await admin_service.list_club_event_registrations(current_admin, club_name)
