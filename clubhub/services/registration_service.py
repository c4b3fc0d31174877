"""
Event Registration Service
Decides whether a student may sign up for an event and records the sign-up
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

from clubhub.clock import utcnow, as_utc
from clubhub.config import settings
from clubhub.database import database, as_dict, nest_prefixed, INTEGRITY_ERRORS, is_unique_violation
from clubhub.errors import AuthorizationError, NotFoundError, PolicyRejection, RejectionReason
from clubhub.schemas.common import RegistrationStatus
from clubhub.schemas.registration import EventRegistrationRequest
from clubhub.services.pagination import page_bounds, page_info
from clubhub.services.policy import PolicyOutcome, check_event, raise_for_outcome

logger = logging.getLogger(__name__)

EVENT_SUMMARY_COLUMNS = """
    e.title AS event__title,
    e.event_date AS event__event_date,
    e.event_time AS event__event_time,
    e.venue AS event__venue,
    e.club_name AS event__club_name
"""


def _require_student(user: dict, action: str):
    if user["role"] != "student":
        logger.warning("User %s (%s) tried to %s", user["id"], user["role"], action)
        raise AuthorizationError(f"Only students can {action}")


class RegistrationService:
    """Service for event registration operations"""

    @staticmethod
    async def get_active_event(event_id: UUID) -> dict:
        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :id AND is_active = TRUE",
            {"id": str(event_id)}
        )

        if not event:
            raise NotFoundError("Event not found or inactive")

        return as_dict(event)

    @staticmethod
    async def count_active_registrations(event_id: UUID) -> int:
        """Registrations holding a seat (registered or confirmed)"""
        count = await database.fetch_val(
            """
            SELECT COUNT(*) FROM event_registrations
            WHERE event_id = :event_id AND status IN ('registered', 'confirmed')
            """,
            {"event_id": str(event_id)}
        )
        return count or 0

    @staticmethod
    async def get_registration(registration_id: str) -> dict:
        row = await database.fetch_one(
            "SELECT * FROM event_registrations WHERE id = :id",
            {"id": str(registration_id)}
        )
        if not row:
            raise NotFoundError("Registration not found")
        return as_dict(row)

    @staticmethod
    async def register_for_event(
        user: dict,
        event_id: UUID,
        data: Optional[EventRegistrationRequest] = None
    ) -> dict:
        """
        Register a student for an event

        Checks run in order: event exists and is active, the submission
        window is open (not past, before the deadline, seats left), then
        the student has no registration yet. The unique index on
        (event_id, student_id) backs up the duplicate probe when two
        requests race.

        Raises:
            AuthorizationError: caller is not a student
            NotFoundError: event missing or soft-deleted
            PolicyRejection: window closed, event full or already registered
        """
        _require_student(user, "register for events")
        data = data or EventRegistrationRequest()

        event = await RegistrationService.get_active_event(event_id)
        event_id = str(event["id"])

        active_count = await RegistrationService.count_active_registrations(event_id)
        outcome = check_event(event, utcnow(), active_count)
        if outcome != PolicyOutcome.ALLOWED:
            logger.info("Registration for event %s refused: %s", event_id, outcome.value)
            raise_for_outcome(outcome)

        existing = await database.fetch_one(
            """
            SELECT id, status FROM event_registrations
            WHERE event_id = :event_id AND student_id = :student_id
            """,
            {"event_id": event_id, "student_id": user["id"]}
        )

        if existing:
            existing = as_dict(existing)
            if (
                existing["status"] == RegistrationStatus.CANCELLED.value
                and settings.ALLOW_REREGISTRATION_AFTER_CANCEL
            ):
                return await RegistrationService._reactivate(existing["id"], user, data)

            logger.info("Student %s already registered for event %s", user["id"], event_id)
            raise PolicyRejection(RejectionReason.ALREADY_REGISTERED, "Already registered for this event")

        registration_id = str(uuid4())
        now = utcnow()

        try:
            await database.execute(
                """
                INSERT INTO event_registrations (
                    id, event_id, student_id, student_name, roll_number, department, email,
                    phone, additional_info, status, created_at, updated_at
                )
                VALUES (
                    :id, :event_id, :student_id, :student_name, :roll_number, :department, :email,
                    :phone, :additional_info, 'registered', :now, :now
                )
                """,
                {
                    "id": registration_id,
                    "event_id": event_id,
                    "student_id": user["id"],
                    "now": now,
                    **RegistrationService._snapshot(user, data),
                }
            )
        except INTEGRITY_ERRORS as exc:
            if not is_unique_violation(exc):
                raise
            logger.info("Concurrent duplicate registration for event %s by %s", event_id, user["id"])
            raise PolicyRejection(RejectionReason.ALREADY_REGISTERED, "Already registered for this event")

        logger.info("Student %s registered for event %s", user["id"], event_id)
        return await RegistrationService.get_registration(registration_id)

    @staticmethod
    def _snapshot(user: dict, data: EventRegistrationRequest) -> dict:
        """Profile fields copied at sign-up; later profile edits do not touch them"""
        return {
            "student_name": user["name"],
            "roll_number": user.get("roll_number") or "",
            "department": user.get("department") or "",
            "email": user["email"],
            "phone": data.phone,
            "additional_info": data.additional_info or "",
        }

    @staticmethod
    async def _reactivate(registration_id: str, user: dict, data: EventRegistrationRequest) -> dict:
        """Bring a cancelled registration back with a fresh snapshot"""
        await database.execute(
            """
            UPDATE event_registrations
            SET status = 'registered', student_name = :student_name, roll_number = :roll_number,
                department = :department, email = :email, phone = :phone,
                additional_info = :additional_info, updated_at = :now
            WHERE id = :id
            """,
            {"id": str(registration_id), "now": utcnow(), **RegistrationService._snapshot(user, data)}
        )
        logger.info("Student %s re-registered (registration %s)", user["id"], registration_id)
        return await RegistrationService.get_registration(registration_id)

    @staticmethod
    async def cancel_registration(user: dict, event_id: UUID) -> dict:
        """
        Cancel the student's registration for an event

        Only a live registration can be cancelled, so cancelling twice
        is a NotFoundError. The record is kept with status 'cancelled'.
        """
        _require_student(user, "cancel registrations")

        registration = await database.fetch_one(
            """
            SELECT r.id, e.event_date
            FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE r.event_id = :event_id AND r.student_id = :student_id
              AND r.status != 'cancelled'
            """,
            {"event_id": str(event_id), "student_id": user["id"]}
        )

        if not registration:
            raise NotFoundError("Registration not found")

        registration = as_dict(registration)

        if utcnow() >= as_utc(registration["event_date"]):
            logger.info("Cancel refused for past event %s", event_id)
            raise PolicyRejection(
                RejectionReason.ALREADY_OCCURRED,
                "Cannot cancel registration for past events"
            )

        await database.execute(
            """
            UPDATE event_registrations
            SET status = 'cancelled', updated_at = :now
            WHERE id = :id
            """,
            {"id": str(registration["id"]), "now": utcnow()}
        )

        logger.info("Student %s cancelled registration for event %s", user["id"], event_id)
        return await RegistrationService.get_registration(registration["id"])

    @staticmethod
    async def list_my_registrations(user: dict, page: int = 1, limit: int = 10) -> dict:
        """Student's live registrations for active events, newest first"""
        _require_student(user, "view their registrations")
        limit, offset = page_bounds(page, limit)

        where = """
            FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE r.student_id = :student_id AND r.status != 'cancelled' AND e.is_active = TRUE
        """
        params = {"student_id": user["id"]}

        total = await database.fetch_val(f"SELECT COUNT(*) {where}", params)
        rows = await database.fetch_all(
            f"""
            SELECT r.*, {EVENT_SUMMARY_COLUMNS}
            {where}
            ORDER BY r.created_at DESC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "registrations": [nest_prefixed(as_dict(row), "event") for row in rows],
            **page_info(total or 0, page, limit),
        }

    @staticmethod
    async def get_owned_event(admin: dict, event_id: UUID) -> dict:
        """Event the admin's club owns (active or not)"""
        event = await database.fetch_one(
            "SELECT * FROM events WHERE id = :id",
            {"id": str(event_id)}
        )
        if not event:
            raise NotFoundError("Event not found")

        event = as_dict(event)
        if event["club_name"] != admin["club_name"]:
            logger.warning("Admin %s denied access to event %s", admin["id"], event_id)
            raise AuthorizationError("Not authorized to manage this event")
        return event

    @staticmethod
    async def list_event_registrations(
        admin: dict,
        event_id: UUID,
        page: int = 1,
        limit: int = 50
    ) -> dict:
        """Live registrations for one of the admin's events, in sign-up order"""
        event = await RegistrationService.get_owned_event(admin, event_id)
        limit, offset = page_bounds(page, limit)
        params = {"event_id": str(event["id"])}

        total = await database.fetch_val(
            """
            SELECT COUNT(*) FROM event_registrations
            WHERE event_id = :event_id AND status != 'cancelled'
            """,
            params
        )
        rows = await database.fetch_all(
            """
            SELECT * FROM event_registrations
            WHERE event_id = :event_id AND status != 'cancelled'
            ORDER BY created_at ASC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "registrations": [as_dict(row) for row in rows],
            **page_info(total or 0, page, limit),
        }

    @staticmethod
    async def update_registration_status(
        admin: dict,
        registration_id: UUID,
        new_status: RegistrationStatus
    ) -> dict:
        """Owning club admin marks a registration confirmed, attended, etc."""
        row = await database.fetch_one(
            """
            SELECT r.id, e.club_name
            FROM event_registrations r
            JOIN events e ON e.id = r.event_id
            WHERE r.id = :id
            """,
            {"id": str(registration_id)}
        )

        if not row:
            raise NotFoundError("Registration not found")

        row = as_dict(row)
        if row["club_name"] != admin["club_name"]:
            logger.warning("Admin %s denied update of registration %s", admin["id"], registration_id)
            raise AuthorizationError("Not authorized to update this registration")

        status_value = RegistrationStatus(new_status).value
        await database.execute(
            """
            UPDATE event_registrations
            SET status = :status, updated_at = :now
            WHERE id = :id
            """,
            {"id": str(row["id"]), "status": status_value, "now": utcnow()}
        )

        logger.info("Registration %s set to %s by %s", registration_id, status_value, admin["id"])
        return await RegistrationService.get_registration(row["id"])


# Create singleton instance
registration_service = RegistrationService()
