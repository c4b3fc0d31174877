"""
Event Request/Response Models
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, ClubName, EventType, parse_json_column


class CreateEventRequest(CamelModel):
    """Request to create an event (club taken from the admin)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    event_date: datetime
    event_time: str = Field(..., min_length=1, max_length=50)
    venue: str = Field(..., min_length=1, max_length=200)
    image: Optional[str] = None
    event_type: EventType = EventType.OTHER
    tags: List[str] = Field(default_factory=list)
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None

    @field_validator("title", "description", "event_time", "venue")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: List[str]) -> List[str]:
        return [t.strip() for t in v if t.strip()]


class UpdateEventRequest(CamelModel):
    """Partial update; club and creator cannot be changed"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    event_date: Optional[datetime] = None
    event_time: Optional[str] = Field(default=None, min_length=1, max_length=50)
    venue: Optional[str] = Field(default=None, min_length=1, max_length=200)
    image: Optional[str] = None
    event_type: Optional[EventType] = None
    tags: Optional[List[str]] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    registration_deadline: Optional[datetime] = None


class EventResponse(CamelModel):
    """Event details"""
    id: UUID
    club_name: ClubName
    created_by: UUID
    title: str
    description: str
    event_date: datetime
    event_time: str
    venue: str
    image: Optional[str] = None
    event_type: EventType
    tags: List[str] = Field(default_factory=list)
    max_participants: Optional[int] = None
    registration_deadline: Optional[datetime] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_registered: Optional[bool] = None

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return parse_json_column(v) or []


class EventListResponse(CamelModel):
    """Paginated list of events"""
    events: List[EventResponse]
    total: int
    total_pages: int
    current_page: int


class EventSummary(CamelModel):
    """Event fields embedded in registration listings"""
    title: str
    event_date: datetime
    event_time: str
    venue: str
    club_name: ClubName
