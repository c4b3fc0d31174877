"""
Admin Service
Read-only reporting for club admins
"""

import logging

from clubhub.clock import utcnow
from clubhub.database import database, as_dict, nest_prefixed
from clubhub.errors import AuthorizationError
from clubhub.schemas.common import ClubName
from clubhub.services.application_service import RECRUITMENT_SUMMARY_COLUMNS
from clubhub.services.registration_service import EVENT_SUMMARY_COLUMNS

logger = logging.getLogger(__name__)

RECENT_APPLICATIONS = 5


def _require_own_club(admin: dict, club_name: ClubName, what: str):
    if admin["club_name"] != club_name.value:
        logger.warning("Admin %s (%s) denied %s of %s", admin["id"], admin["club_name"], what, club_name.value)
        raise AuthorizationError(f"Access denied. You can only view {what} for your club.")


class AdminService:
    """Service for club admin reporting"""

    @staticmethod
    async def get_club_stats(admin: dict, club_name: ClubName) -> dict:
        """Dashboard counters plus the latest applications"""

        _require_own_club(admin, club_name, "stats")
        params = {"club_name": club_name.value}

        total_events = await database.fetch_val(
            "SELECT COUNT(*) FROM events WHERE club_name = :club_name",
            params
        )

        upcoming_events = await database.fetch_val(
            "SELECT COUNT(*) FROM events WHERE club_name = :club_name AND event_date >= :now",
            {**params, "now": utcnow()}
        )

        total_registrations = await database.fetch_val(
            """
            SELECT COUNT(*) FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE e.club_name = :club_name
            """,
            params
        )

        membership_applications = await database.fetch_val(
            """
            SELECT COUNT(*) FROM club_applications a
            JOIN recruitments rc ON rc.id = a.recruitment_id
            WHERE rc.club_name = :club_name
            """,
            params
        )

        recent = await database.fetch_all(
            f"""
            SELECT a.*, {RECRUITMENT_SUMMARY_COLUMNS}
            FROM club_applications a
            JOIN recruitments rc ON rc.id = a.recruitment_id
            WHERE rc.club_name = :club_name
            ORDER BY a.created_at DESC
            LIMIT :limit
            """,
            {**params, "limit": RECENT_APPLICATIONS}
        )

        return {
            "club_name": club_name,
            "total_events": total_events or 0,
            "upcoming_events": upcoming_events or 0,
            "total_registrations": total_registrations or 0,
            "membership_applications": membership_applications or 0,
            "recent_applications": [nest_prefixed(as_dict(row), "recruitment") for row in recent],
        }

    @staticmethod
    async def list_club_applications(admin: dict, club_name: ClubName) -> dict:
        """Every application to the club's recruitments, newest first"""

        _require_own_club(admin, club_name, "applications")

        rows = await database.fetch_all(
            f"""
            SELECT a.*, {RECRUITMENT_SUMMARY_COLUMNS}
            FROM club_applications a
            JOIN recruitments rc ON rc.id = a.recruitment_id
            WHERE rc.club_name = :club_name
            ORDER BY a.created_at DESC
            """,
            {"club_name": club_name.value}
        )
        applications = [nest_prefixed(as_dict(row), "recruitment") for row in rows]

        return {"club_name": club_name, "total": len(applications), "applications": applications}

    @staticmethod
    async def list_club_event_registrations(admin: dict, club_name: ClubName) -> dict:
        """Every registration for the club's events, newest first"""

        _require_own_club(admin, club_name, "event registrations")

        rows = await database.fetch_all(
            f"""
            SELECT r.*, {EVENT_SUMMARY_COLUMNS}
            FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE e.club_name = :club_name
            ORDER BY r.created_at DESC
            """,
            {"club_name": club_name.value}
        )
        registrations = [nest_prefixed(as_dict(row), "event") for row in rows]

        return {"club_name": club_name, "total": len(registrations), "registrations": registrations}


# Create singleton instance
admin_service = AdminService()
