"""
Event Registration Request/Response Models
"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, RegistrationStatus
from clubhub.schemas.event import EventSummary


class EventRegistrationRequest(CamelModel):
    """Body of POST /events/{event_id}/registrations"""
    phone: Optional[str] = Field(default=None, max_length=30, pattern=r"^\+?[0-9][0-9\s\-]{5,20}$")
    additional_info: Optional[str] = Field(default=None, max_length=2000)


class RegistrationResponse(CamelModel):
    """Registration with the student snapshot taken at sign-up"""
    id: UUID
    event_id: UUID
    student_id: UUID
    student_name: str
    roll_number: str
    department: str
    email: str
    phone: Optional[str] = None
    additional_info: str = ""
    status: RegistrationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    event: Optional[EventSummary] = None


class RegistrationListResponse(CamelModel):
    registrations: List[RegistrationResponse]
    total: int
    total_pages: int
    current_page: int


class UpdateRegistrationStatusRequest(CamelModel):
    status: RegistrationStatus


class CancelRegistrationResponse(CamelModel):
    message: str
    registration: RegistrationResponse
