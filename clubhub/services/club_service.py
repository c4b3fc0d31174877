"""
Club Service
Club profiles, seeded with default content on first request
"""

import json
import logging
from uuid import uuid4

from clubhub.clock import utcnow
from clubhub.database import database, as_dict, INTEGRITY_ERRORS, is_unique_violation
from clubhub.schemas.common import ClubName

logger = logging.getLogger(__name__)

DEFAULT_PROFILES = {
    ClubName.CSI: {
        "description": (
            "Computer Society of India - Fostering innovation in technology and computer "
            "science through workshops, competitions, and technical events."
        ),
        "popular_people": [
            {"name": "Dr. Rajesh Kumar", "position": "Faculty Coordinator",
             "bio": "Professor of Computer Science with 15+ years experience"},
            {"name": "Priya Sharma", "position": "President",
             "bio": "Final year CSE student, passionate about AI and ML"},
            {"name": "Arjun Patel", "position": "Technical Lead",
             "bio": "Expert in web development and competitive programming"},
        ],
    },
    ClubName.GDSC: {
        "description": (
            "Google Developer Student Club - Building the next generation of developers "
            "through Google technologies, cloud computing, and open source contributions."
        ),
        "popular_people": [
            {"name": "Prof. Anita Singh", "position": "Faculty Advisor",
             "bio": "Google Certified Professional with expertise in cloud technologies"},
            {"name": "Rohit Verma", "position": "Lead",
             "bio": "Google Developer Expert, specializing in Android development"},
            {"name": "Sneha Gupta", "position": "Co-Lead",
             "bio": "Flutter enthusiast and open source contributor"},
        ],
    },
    ClubName.APTNUS_GANA: {
        "description": (
            "Aptnus Gana - Celebrating creativity and cultural diversity through music, dance, "
            "drama, and artistic expressions. Building confidence and showcasing talent."
        ),
        "popular_people": [
            {"name": "Dr. Meera Reddy", "position": "Cultural Coordinator",
             "bio": "Renowned classical dancer and cultural enthusiast"},
            {"name": "Vikram Singh", "position": "President",
             "bio": "Talented musician and event organizer"},
            {"name": "Kavya Nair", "position": "Creative Director",
             "bio": "Award-winning choreographer and performer"},
        ],
    },
}

PREVIEW_SIZE = 5


class ClubService:
    """Service for club profile operations"""

    @staticmethod
    async def _fetch_profile(club_name: ClubName):
        return await database.fetch_one(
            "SELECT * FROM clubs WHERE name = :name",
            {"name": club_name.value}
        )

    @staticmethod
    async def get_or_create_profile(club_name: ClubName) -> dict:
        """Load the club row, creating it from DEFAULT_PROFILES the first time"""

        club = await ClubService._fetch_profile(club_name)
        if club:
            return as_dict(club)

        profile = DEFAULT_PROFILES[club_name]
        now = utcnow()

        try:
            await database.execute(
                """
                INSERT INTO clubs (id, name, description, popular_people, created_at, updated_at)
                VALUES (:id, :name, :description, :popular_people, :now, :now)
                """,
                {
                    "id": str(uuid4()),
                    "name": club_name.value,
                    "description": profile["description"],
                    "popular_people": json.dumps(profile["popular_people"]),
                    "now": now,
                }
            )
            logger.info("Seeded default profile for %s", club_name.value)
        except INTEGRITY_ERRORS as exc:
            # Another request seeded it first
            if not is_unique_violation(exc):
                raise

        return as_dict(await ClubService._fetch_profile(club_name))

    @staticmethod
    async def get_club(club_name: ClubName) -> dict:
        """Club profile with its next and most recent active events"""

        club = await ClubService.get_or_create_profile(club_name)
        params = {"club_name": club_name.value, "now": utcnow(), "limit": PREVIEW_SIZE}

        upcoming = await database.fetch_all(
            """
            SELECT * FROM events
            WHERE club_name = :club_name AND is_active = TRUE AND event_date >= :now
            ORDER BY event_date ASC
            LIMIT :limit
            """,
            params
        )
        past = await database.fetch_all(
            """
            SELECT * FROM events
            WHERE club_name = :club_name AND is_active = TRUE AND event_date < :now
            ORDER BY event_date DESC
            LIMIT :limit
            """,
            params
        )

        club["upcoming_events"] = [as_dict(row) for row in upcoming]
        club["past_events"] = [as_dict(row) for row in past]
        return club


# Create singleton instance
club_service = ClubService()
