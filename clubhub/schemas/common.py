"""
Shared Enumerations and Base Models
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ClubName(str, Enum):
    """The fixed set of campus clubs"""
    CSI = "CSI"
    GDSC = "GDSC"
    APTNUS_GANA = "Aptnus Gana"


class UserRole(str, Enum):
    STUDENT = "student"
    CLUB_ADMIN = "club_admin"


class EventType(str, Enum):
    WORKSHOP = "workshop"
    SEMINAR = "seminar"
    COMPETITION = "competition"
    CULTURAL = "cultural"
    TECHNICAL = "technical"
    OTHER = "other"


class RegistrationStatus(str, Enum):
    REGISTERED = "registered"
    CONFIRMED = "confirmed"
    ATTENDED = "attended"
    CANCELLED = "cancelled"


class ApplicationStatus(str, Enum):
    APPLIED = "applied"
    UNDER_REVIEW = "under_review"
    SHORTLISTED = "shortlisted"
    SELECTED = "selected"
    REJECTED = "rejected"


class FieldType(str, Enum):
    SHORT_TEXT = "short_text"
    LONG_TEXT = "long_text"
    URL = "url"
    NUMBER = "number"
    SELECT = "select"
    MULTISELECT = "multiselect"


class CamelModel(BaseModel):
    """
    Base for API models

    Fields are snake_case in Python and in the database, camelCase on the
    wire. Either spelling is accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def parse_json_column(value: Any) -> Any:
    """JSON columns come back from raw queries as text"""
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


class MessageResponse(BaseModel):
    message: str
