"""
Event Service
Business logic for club events
"""

import json
import logging
from typing import Optional
from uuid import UUID, uuid4

from clubhub.clock import utcnow, as_utc
from clubhub.database import database, as_dict
from clubhub.errors import AuthorizationError, NotFoundError, ValidationError
from clubhub.schemas.event import CreateEventRequest, UpdateEventRequest
from clubhub.services.pagination import page_bounds, page_info

logger = logging.getLogger(__name__)


class EventService:
    """Service for event management operations"""

    @staticmethod
    async def create_event(admin: dict, data: CreateEventRequest) -> dict:
        """Create an event for the admin's club"""

        if as_utc(data.event_date) <= utcnow():
            raise ValidationError("Event date must be in the future")

        event_id = str(uuid4())
        now = utcnow()

        await database.execute(
            """
            INSERT INTO events (
                id, club_name, created_by, title, description, event_date, event_time, venue,
                image, event_type, tags, max_participants, registration_deadline, is_active,
                created_at, updated_at
            )
            VALUES (
                :id, :club_name, :created_by, :title, :description, :event_date, :event_time, :venue,
                :image, :event_type, :tags, :max_participants, :registration_deadline, TRUE,
                :now, :now
            )
            """,
            {
                "id": event_id,
                "club_name": admin["club_name"],
                "created_by": admin["id"],
                "title": data.title,
                "description": data.description,
                "event_date": as_utc(data.event_date),
                "event_time": data.event_time,
                "venue": data.venue,
                "image": data.image,
                "event_type": data.event_type.value,
                "tags": json.dumps(data.tags),
                "max_participants": data.max_participants,
                "registration_deadline": as_utc(data.registration_deadline),
                "now": now,
            }
        )

        logger.info("Event %s created for %s by %s", event_id, admin["club_name"], admin["id"])
        return await EventService.get_event(event_id, active_only=False)

    @staticmethod
    async def get_event(event_id: UUID, active_only: bool = True) -> dict:
        """Get event by ID"""

        query = "SELECT * FROM events WHERE id = :id"
        if active_only:
            query += " AND is_active = TRUE"

        event = await database.fetch_one(query, {"id": str(event_id)})

        if not event:
            raise NotFoundError("Event not found")

        return as_dict(event)

    @staticmethod
    async def _get_editable_event(admin: dict, event_id: UUID) -> dict:
        """Creator or any admin of the same club may edit"""
        event = await EventService.get_event(event_id)

        is_creator = str(event["created_by"]) == str(admin["id"])
        if not is_creator and event["club_name"] != admin["club_name"]:
            logger.warning("Admin %s denied edit of event %s", admin["id"], event_id)
            raise AuthorizationError("Not authorized to modify this event")

        return event

    @staticmethod
    async def update_event(admin: dict, event_id: UUID, data: UpdateEventRequest) -> dict:
        """Partial update; club and creator stay fixed"""

        event = await EventService._get_editable_event(admin, event_id)
        changes = data.model_dump(exclude_unset=True)

        if "event_date" in changes:
            if changes["event_date"] is None:
                raise ValidationError("Event date cannot be removed")
            if as_utc(changes["event_date"]) <= utcnow():
                raise ValidationError("Event date must be in the future")

        for field in ("title", "description", "event_time", "venue", "event_type"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be removed")

        if not changes:
            return event

        params = {"id": str(event["id"]), "now": utcnow()}
        assignments = ["updated_at = :now"]
        for field, value in changes.items():
            if field in ("event_date", "registration_deadline"):
                value = as_utc(value)
            elif field == "event_type":
                value = value.value
            elif field == "tags":
                value = json.dumps([t.strip() for t in (value or []) if t.strip()])
            assignments.append(f"{field} = :{field}")
            params[field] = value

        await database.execute(
            f"UPDATE events SET {', '.join(assignments)} WHERE id = :id",
            params
        )

        logger.info("Event %s updated by %s: %s", event_id, admin["id"], sorted(changes))
        return await EventService.get_event(event["id"])

    @staticmethod
    async def delete_event(admin: dict, event_id: UUID) -> None:
        """Soft delete; registrations are kept"""

        event = await EventService._get_editable_event(admin, event_id)

        await database.execute(
            "UPDATE events SET is_active = FALSE, updated_at = :now WHERE id = :id",
            {"id": str(event["id"]), "now": utcnow()}
        )

        logger.info("Event %s deactivated by %s", event_id, admin["id"])

    @staticmethod
    async def list_events(
        club_name: Optional[str] = None,
        event_type: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> dict:
        """Active events, soonest first"""

        limit, offset = page_bounds(page, limit)
        filters = ["is_active = TRUE"]
        params = {}

        if club_name:
            filters.append("club_name = :club_name")
            params["club_name"] = club_name
        if event_type:
            filters.append("event_type = :event_type")
            params["event_type"] = event_type

        where = " AND ".join(filters)

        total = await database.fetch_val(f"SELECT COUNT(*) FROM events WHERE {where}", params)
        rows = await database.fetch_all(
            f"""
            SELECT * FROM events WHERE {where}
            ORDER BY event_date ASC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "events": [as_dict(row) for row in rows],
            **page_info(total or 0, page, limit),
        }

    @staticmethod
    async def list_club_events(club_name: str, user: Optional[dict] = None) -> list:
        """
        All active events of a club

        For a signed-in viewer each event carries is_registered, true when
        they hold a registration that is not cancelled.
        """
        rows = await database.fetch_all(
            """
            SELECT * FROM events
            WHERE club_name = :club_name AND is_active = TRUE
            ORDER BY event_date ASC
            """,
            {"club_name": club_name}
        )
        events = [as_dict(row) for row in rows]

        if user is None:
            return events

        registered = await database.fetch_all(
            """
            SELECT r.event_id FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE r.student_id = :student_id AND r.status != 'cancelled'
              AND e.club_name = :club_name
            """,
            {"student_id": user["id"], "club_name": club_name}
        )
        registered_ids = {str(as_dict(row)["event_id"]) for row in registered}

        for event in events:
            event["is_registered"] = str(event["id"]) in registered_ids

        return events


# Create singleton instance
event_service = EventService()
