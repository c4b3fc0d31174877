"""
Club Admin Reporting Models
"""

from typing import List

from clubhub.schemas.common import CamelModel, ClubName
from clubhub.schemas.application import ApplicationResponse
from clubhub.schemas.registration import RegistrationResponse


class ClubStatsResponse(CamelModel):
    """Club admin dashboard stats"""
    club_name: ClubName
    total_events: int
    upcoming_events: int
    total_registrations: int
    membership_applications: int
    recent_applications: List[ApplicationResponse]


class ClubApplicationsResponse(CamelModel):
    club_name: ClubName
    total: int
    applications: List[ApplicationResponse]


class ClubRegistrationsResponse(CamelModel):
    club_name: ClubName
    total: int
    registrations: List[RegistrationResponse]
