"""
Event Routes
Event listing and management, plus student registration for events
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from clubhub.auth import get_club_admin, get_optional_user, get_student
from clubhub.schemas.common import ClubName, EventType, MessageResponse
from clubhub.schemas.event import CreateEventRequest, UpdateEventRequest, EventResponse, EventListResponse
from clubhub.schemas.registration import (
    EventRegistrationRequest,
    RegistrationResponse,
    RegistrationListResponse,
    CancelRegistrationResponse,
)
from clubhub.services.event_service import event_service
from clubhub.services.registration_service import registration_service

router = APIRouter()


@router.get("", response_model=EventListResponse)
async def list_events(
    club_name: Optional[ClubName] = Query(None, alias="clubName"),
    event_type: Optional[EventType] = Query(None, alias="eventType"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100)
):
    """Active events, soonest first"""
    return await event_service.list_events(
        club_name=club_name.value if club_name else None,
        event_type=event_type.value if event_type else None,
        page=page,
        limit=limit
    )


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_admin: dict = Depends(get_club_admin)
):
    """Create an event for the admin's club (Club Admin only)"""
    return await event_service.create_event(current_admin, request)


@router.get("/club/{club_name}", response_model=List[EventResponse])
async def list_club_events(
    club_name: ClubName,
    current_user: Optional[dict] = Depends(get_optional_user)
):
    """
    Active events of one club

    With a bearer token each event carries `isRegistered` for the caller.
    """
    return await event_service.list_club_events(club_name.value, current_user)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: UUID):
    return await event_service.get_event(event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    current_admin: dict = Depends(get_club_admin)
):
    """Update an event (creator or an admin of the same club)"""
    return await event_service.update_event(current_admin, event_id, request)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: UUID,
    current_admin: dict = Depends(get_club_admin)
):
    """Deactivate an event; registrations are kept"""
    await event_service.delete_event(current_admin, event_id)
    return {"message": "Event deleted successfully"}


@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED
)
async def register_for_event(
    event_id: UUID,
    request: Optional[EventRegistrationRequest] = None,
    current_student: dict = Depends(get_student)
):
    """
    Register the signed-in student for an event

    - 400: registration closed, event full or already registered
    - 404: event missing or inactive
    """
    return await registration_service.register_for_event(current_student, event_id, request)


@router.delete("/{event_id}/registrations", response_model=CancelRegistrationResponse)
async def cancel_registration(
    event_id: UUID,
    current_student: dict = Depends(get_student)
):
    """Cancel the signed-in student's registration"""
    registration = await registration_service.cancel_registration(current_student, event_id)
    return {"message": "Registration cancelled successfully", "registration": registration}


@router.get("/{event_id}/registrations", response_model=RegistrationListResponse)
async def list_event_registrations(
    event_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    current_admin: dict = Depends(get_club_admin)
):
    """Live registrations for one of the admin's events"""
    return await registration_service.list_event_registrations(current_admin, event_id, page, limit)
