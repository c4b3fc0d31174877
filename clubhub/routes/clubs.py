"""
Club Routes
Public club profiles
"""

from fastapi import APIRouter
from clubhub.schemas.club import ClubResponse
from clubhub.schemas.common import ClubName
from clubhub.services.club_service import club_service

router = APIRouter()


@router.get("/{club_name}", response_model=ClubResponse)
async def get_club(club_name: ClubName):
    """Club profile with up to five upcoming and five past events"""
    return await club_service.get_club(club_name)
