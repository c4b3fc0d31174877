"""
Database Models
Import all models here for Alembic migrations
"""

from clubhub.models.user import User
from clubhub.models.club import Club
from clubhub.models.event import Event, EventRegistration
from clubhub.models.recruitment import Recruitment, ClubApplication

__all__ = [
    "User",
    "Club",
    "Event",
    "EventRegistration",
    "Recruitment",
    "ClubApplication",
]
