"""
Club Application Service
Recruitment applications and their review lifecycle
"""

import json
import logging
from uuid import UUID, uuid4

from clubhub.clock import utcnow
from clubhub.database import database, as_dict, nest_prefixed, INTEGRITY_ERRORS, is_unique_violation
from clubhub.errors import AuthorizationError, NotFoundError, PolicyRejection, RejectionReason
from clubhub.schemas.application import ClubApplicationRequest, UpdateApplicationStatusRequest
from clubhub.schemas.common import parse_json_column
from clubhub.services.answers import validate_answers
from clubhub.services.pagination import page_bounds, page_info
from clubhub.services.policy import PolicyOutcome, check_recruitment, raise_for_outcome
from clubhub.services.state_machine import ensure_transition

logger = logging.getLogger(__name__)

RECRUITMENT_SUMMARY_COLUMNS = """
    rc.title AS recruitment__title,
    rc.club_name AS recruitment__club_name,
    rc.application_deadline AS recruitment__application_deadline
"""


class ApplicationService:
    """Service for recruitment application operations"""

    @staticmethod
    async def get_active_recruitment(recruitment_id: UUID) -> dict:
        recruitment = await database.fetch_one(
            "SELECT * FROM recruitments WHERE id = :id AND is_active = TRUE",
            {"id": str(recruitment_id)}
        )

        if not recruitment:
            raise NotFoundError("Recruitment not found or inactive")

        recruitment = as_dict(recruitment)
        recruitment["positions"] = parse_json_column(recruitment["positions"]) or []
        recruitment["questions"] = parse_json_column(recruitment["questions"]) or []
        return recruitment

    @staticmethod
    async def get_application(application_id: str) -> dict:
        row = await database.fetch_one(
            "SELECT * FROM club_applications WHERE id = :id",
            {"id": str(application_id)}
        )
        if not row:
            raise NotFoundError("Application not found")
        return as_dict(row)

    @staticmethod
    async def apply_to_recruitment(user: dict, recruitment_id: UUID, data: ClubApplicationRequest) -> dict:
        """
        Submit a student's application to a recruitment drive

        Order of checks: recruitment active, deadline, position, duplicate,
        then the answers against the recruitment's questions. A unique
        violation on (recruitment_id, student_id) at insert time is
        reported the same way as the duplicate probe.

        Raises:
            AuthorizationError: caller is not a student
            NotFoundError: recruitment missing or soft-deleted
            PolicyRejection: deadline passed, unknown position, already
                applied, missing required answers or an invalid answer
        """
        if user["role"] != "student":
            logger.warning("User %s (%s) tried to apply to a recruitment", user["id"], user["role"])
            raise AuthorizationError("Only students can apply to recruitments")

        recruitment = await ApplicationService.get_active_recruitment(recruitment_id)
        recruitment_id = str(recruitment["id"])

        outcome = check_recruitment(recruitment, utcnow())
        if outcome != PolicyOutcome.ALLOWED:
            logger.info("Application to %s refused: %s", recruitment_id, outcome.value)
            raise_for_outcome(outcome, "Application deadline has passed")

        roles = [p.get("role") for p in recruitment["positions"]]
        if data.applied_position not in roles:
            logger.info("Application to %s refused: unknown position %r", recruitment_id, data.applied_position)
            raise PolicyRejection(RejectionReason.INVALID_POSITION, "Invalid position selected")

        existing = await database.fetch_one(
            """
            SELECT id FROM club_applications
            WHERE recruitment_id = :recruitment_id AND student_id = :student_id
            """,
            {"recruitment_id": recruitment_id, "student_id": user["id"]}
        )

        if existing:
            logger.info("Student %s already applied to %s", user["id"], recruitment_id)
            raise PolicyRejection(RejectionReason.ALREADY_APPLIED, "Already applied for this recruitment")

        try:
            answers = validate_answers(recruitment["questions"], data.answers)
        except PolicyRejection as exc:
            logger.info("Application to %s refused: %s", recruitment_id, exc.reason.value)
            raise

        application_id = str(uuid4())
        now = utcnow()

        try:
            await database.execute(
                """
                INSERT INTO club_applications (
                    id, recruitment_id, student_id, student_name, roll_number, department, email,
                    phone, applied_position, experience, skills, why_join, portfolio, resume,
                    answers, status, feedback, created_at, updated_at
                )
                VALUES (
                    :id, :recruitment_id, :student_id, :student_name, :roll_number, :department, :email,
                    :phone, :applied_position, :experience, :skills, :why_join, :portfolio, :resume,
                    :answers, 'applied', '', :now, :now
                )
                """,
                {
                    "id": application_id,
                    "recruitment_id": recruitment_id,
                    "student_id": user["id"],
                    # Snapshot of the profile at submission time
                    "student_name": user["name"],
                    "roll_number": user.get("roll_number") or "",
                    "department": user.get("department") or "",
                    "email": user["email"],
                    "phone": data.phone or "",
                    "applied_position": data.applied_position,
                    "experience": data.experience or "",
                    "skills": data.skills or "",
                    "why_join": data.why_join,
                    "portfolio": data.portfolio or "",
                    "resume": data.resume or "",
                    "answers": json.dumps([a.to_storage() for a in answers]),
                    "now": now,
                }
            )
        except INTEGRITY_ERRORS as exc:
            if not is_unique_violation(exc):
                raise
            logger.info("Concurrent duplicate application to %s by %s", recruitment_id, user["id"])
            raise PolicyRejection(RejectionReason.ALREADY_APPLIED, "Already applied for this recruitment")

        logger.info("Student %s applied to recruitment %s as %s", user["id"], recruitment_id, data.applied_position)
        return await ApplicationService.get_application(application_id)

    @staticmethod
    async def update_application_status(
        admin: dict,
        application_id: UUID,
        data: UpdateApplicationStatusRequest
    ) -> dict:
        """
        Review action by an admin of the recruitment's club

        Status, feedback and interview date are written in one UPDATE.
        Whether the move is allowed depends on APPLICATION_STATUS_POLICY.
        """
        row = await database.fetch_one(
            """
            SELECT a.id, a.status, rc.club_name
            FROM club_applications a
            JOIN recruitments rc ON rc.id = a.recruitment_id
            WHERE a.id = :id
            """,
            {"id": str(application_id)}
        )

        if not row:
            raise NotFoundError("Application not found")

        row = as_dict(row)
        if row["club_name"] != admin["club_name"]:
            logger.warning(
                "Admin %s (%s) denied update of application %s owned by %s",
                admin["id"], admin["club_name"], application_id, row["club_name"]
            )
            raise AuthorizationError("Not authorized to update this application")

        ensure_transition(row["status"], data.status)

        updates = ["status = :status", "updated_at = :now"]
        params = {"id": str(row["id"]), "status": data.status.value, "now": utcnow()}

        if data.feedback is not None:
            updates.append("feedback = :feedback")
            params["feedback"] = data.feedback
        if data.interview_date is not None:
            updates.append("interview_date = :interview_date")
            params["interview_date"] = data.interview_date

        await database.execute(
            f"UPDATE club_applications SET {', '.join(updates)} WHERE id = :id",
            params
        )

        logger.info(
            "Application %s moved %s -> %s by %s",
            application_id, row["status"], data.status.value, admin["id"]
        )
        return await ApplicationService.get_application(row["id"])

    @staticmethod
    async def list_my_applications(user: dict, page: int = 1, limit: int = 10) -> dict:
        """Student's applications, newest first, with the recruitment summary"""
        if user["role"] != "student":
            raise AuthorizationError("Only students can view their applications")
        limit, offset = page_bounds(page, limit)
        params = {"student_id": user["id"]}

        total = await database.fetch_val(
            "SELECT COUNT(*) FROM club_applications WHERE student_id = :student_id",
            params
        )
        rows = await database.fetch_all(
            f"""
            SELECT a.*, {RECRUITMENT_SUMMARY_COLUMNS}
            FROM club_applications a
            JOIN recruitments rc ON rc.id = a.recruitment_id
            WHERE a.student_id = :student_id
            ORDER BY a.created_at DESC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "applications": [nest_prefixed(as_dict(row), "recruitment") for row in rows],
            **page_info(total or 0, page, limit),
        }

    @staticmethod
    async def list_recruitment_applications(
        admin: dict,
        recruitment_id: UUID,
        page: int = 1,
        limit: int = 50
    ) -> dict:
        """Applications to one of the admin's recruitments"""
        recruitment = await database.fetch_one(
            "SELECT id, club_name FROM recruitments WHERE id = :id",
            {"id": str(recruitment_id)}
        )
        if not recruitment:
            raise NotFoundError("Recruitment not found")

        recruitment = as_dict(recruitment)
        if recruitment["club_name"] != admin["club_name"]:
            logger.warning("Admin %s denied access to recruitment %s", admin["id"], recruitment_id)
            raise AuthorizationError("Not authorized to view these applications")

        limit, offset = page_bounds(page, limit)
        params = {"recruitment_id": str(recruitment["id"])}

        total = await database.fetch_val(
            "SELECT COUNT(*) FROM club_applications WHERE recruitment_id = :recruitment_id",
            params
        )
        rows = await database.fetch_all(
            """
            SELECT * FROM club_applications
            WHERE recruitment_id = :recruitment_id
            ORDER BY created_at DESC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "applications": [as_dict(row) for row in rows],
            **page_info(total or 0, page, limit),
        }


# Create singleton instance
application_service = ApplicationService()
