"""
Club Profile Request/Response Models
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, ClubName, parse_json_column
from clubhub.schemas.event import EventResponse


class PopularPerson(CamelModel):
    """A featured member shown on the club page"""
    name: str
    position: str
    image: Optional[str] = None
    bio: Optional[str] = None


class ClubResponse(CamelModel):
    """Club profile with a preview of its events"""
    id: UUID
    name: ClubName
    description: str
    popular_people: List[PopularPerson] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    upcoming_events: List[EventResponse] = Field(default_factory=list)
    past_events: List[EventResponse] = Field(default_factory=list)

    @field_validator("popular_people", mode="before")
    @classmethod
    def parse_people(cls, v):
        return parse_json_column(v) or []
