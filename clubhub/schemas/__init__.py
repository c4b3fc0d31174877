"""
Pydantic schemas for request/response validation
"""

from clubhub.schemas.common import (
    ClubName,
    UserRole,
    EventType,
    RegistrationStatus,
    ApplicationStatus,
    FieldType,
    MessageResponse,
)
from clubhub.schemas.event import CreateEventRequest, UpdateEventRequest, EventResponse
from clubhub.schemas.recruitment import (
    QuestionSchema,
    PositionSchema,
    CreateRecruitmentRequest,
    UpdateRecruitmentRequest,
    RecruitmentResponse,
)
from clubhub.schemas.registration import EventRegistrationRequest, RegistrationResponse
from clubhub.schemas.application import ClubApplicationRequest, ApplicationResponse

__all__ = [
    "ClubName",
    "UserRole",
    "EventType",
    "RegistrationStatus",
    "ApplicationStatus",
    "FieldType",
    "MessageResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "QuestionSchema",
    "PositionSchema",
    "CreateRecruitmentRequest",
    "UpdateRecruitmentRequest",
    "RecruitmentResponse",
    "EventRegistrationRequest",
    "RegistrationResponse",
    "ClubApplicationRequest",
    "ApplicationResponse",
]
