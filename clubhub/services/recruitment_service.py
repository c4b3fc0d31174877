"""
Recruitment Service
Business logic for membership drives
"""

import json
import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID, uuid4

from clubhub.clock import utcnow, as_utc
from clubhub.config import settings
from clubhub.database import database, as_dict
from clubhub.errors import AuthorizationError, NotFoundError, ValidationError
from clubhub.schemas.recruitment import CreateRecruitmentRequest, UpdateRecruitmentRequest
from clubhub.services.pagination import page_bounds, page_info

logger = logging.getLogger(__name__)

DEFAULT_ELIGIBILITY = "No specific requirements"
DEFAULT_APPLICATION_PROCESS = "Apply through the portal"
DEFAULT_POSITION_REQUIREMENTS = "Various responsibilities"


def _dump_list(items) -> str:
    return json.dumps([item.model_dump(mode="json") for item in items])


class RecruitmentService:
    """Service for recruitment management operations"""

    @staticmethod
    async def create_recruitment(admin: dict, data: CreateRecruitmentRequest) -> dict:
        """
        Open a recruitment for the admin's club

        Missing fields get defaults: a deadline DEFAULT_RECRUITMENT_WINDOW_DAYS
        out, and a single position named after the title.
        """
        now = utcnow()

        if data.application_deadline is not None:
            deadline = as_utc(data.application_deadline)
            if deadline <= now:
                raise ValidationError("Application deadline must be in the future")
        else:
            deadline = now + timedelta(days=settings.DEFAULT_RECRUITMENT_WINDOW_DAYS)

        if data.positions:
            positions = _dump_list(data.positions)
        else:
            positions = json.dumps([{
                "role": data.title,
                "count": 1,
                "requirements": DEFAULT_POSITION_REQUIREMENTS,
            }])

        recruitment_id = str(uuid4())

        await database.execute(
            """
            INSERT INTO recruitments (
                id, club_name, created_by, title, description, eligibility, application_process,
                application_deadline, tags, positions, questions, is_active, created_at, updated_at
            )
            VALUES (
                :id, :club_name, :created_by, :title, :description, :eligibility, :application_process,
                :application_deadline, :tags, :positions, :questions, TRUE, :now, :now
            )
            """,
            {
                "id": recruitment_id,
                "club_name": admin["club_name"],
                "created_by": admin["id"],
                "title": data.title,
                "description": data.description,
                "eligibility": data.eligibility or DEFAULT_ELIGIBILITY,
                "application_process": data.application_process or DEFAULT_APPLICATION_PROCESS,
                "application_deadline": deadline,
                "tags": json.dumps(data.tags),
                "positions": positions,
                "questions": _dump_list(data.questions),
                "now": now,
            }
        )

        logger.info("Recruitment %s opened for %s by %s", recruitment_id, admin["club_name"], admin["id"])
        return await RecruitmentService.get_recruitment(recruitment_id)

    @staticmethod
    async def get_recruitment(recruitment_id: UUID, active_only: bool = True) -> dict:
        """Get recruitment by ID"""

        query = "SELECT * FROM recruitments WHERE id = :id"
        if active_only:
            query += " AND is_active = TRUE"

        recruitment = await database.fetch_one(query, {"id": str(recruitment_id)})

        if not recruitment:
            raise NotFoundError("Recruitment not found")

        return as_dict(recruitment)

    @staticmethod
    async def _get_editable_recruitment(admin: dict, recruitment_id: UUID) -> dict:
        recruitment = await RecruitmentService.get_recruitment(recruitment_id)

        is_creator = str(recruitment["created_by"]) == str(admin["id"])
        if not is_creator and recruitment["club_name"] != admin["club_name"]:
            logger.warning("Admin %s denied edit of recruitment %s", admin["id"], recruitment_id)
            raise AuthorizationError("Not authorized to modify this recruitment")

        return recruitment

    @staticmethod
    async def update_recruitment(admin: dict, recruitment_id: UUID, data: UpdateRecruitmentRequest) -> dict:
        """Partial update; club and creator stay fixed"""

        recruitment = await RecruitmentService._get_editable_recruitment(admin, recruitment_id)
        changes = data.model_dump(exclude_unset=True)

        for field in ("title", "description", "eligibility", "application_deadline", "positions"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be removed")

        if "application_deadline" in changes and as_utc(changes["application_deadline"]) <= utcnow():
            raise ValidationError("Application deadline must be in the future")

        if not changes:
            return recruitment

        params = {"id": str(recruitment["id"]), "now": utcnow()}
        assignments = ["updated_at = :now"]
        for field, value in changes.items():
            if field == "application_deadline":
                value = as_utc(value)
            elif field == "positions":
                value = _dump_list(data.positions)
            elif field == "questions":
                value = _dump_list(data.questions or [])
            elif field == "tags":
                value = json.dumps(value or [])
            elif field == "application_process" and not value:
                value = DEFAULT_APPLICATION_PROCESS
            assignments.append(f"{field} = :{field}")
            params[field] = value

        await database.execute(
            f"UPDATE recruitments SET {', '.join(assignments)} WHERE id = :id",
            params
        )

        logger.info("Recruitment %s updated by %s: %s", recruitment_id, admin["id"], sorted(changes))
        return await RecruitmentService.get_recruitment(recruitment["id"])

    @staticmethod
    async def delete_recruitment(admin: dict, recruitment_id: UUID) -> None:
        """Soft delete; applications are kept"""

        recruitment = await RecruitmentService._get_editable_recruitment(admin, recruitment_id)

        await database.execute(
            "UPDATE recruitments SET is_active = FALSE, updated_at = :now WHERE id = :id",
            {"id": str(recruitment["id"]), "now": utcnow()}
        )

        logger.info("Recruitment %s deactivated by %s", recruitment_id, admin["id"])

    @staticmethod
    async def list_recruitments(
        club_name: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> dict:
        """Active recruitments, closest deadline first"""

        limit, offset = page_bounds(page, limit)
        where = "is_active = TRUE"
        params = {}
        if club_name:
            where += " AND club_name = :club_name"
            params["club_name"] = club_name

        total = await database.fetch_val(f"SELECT COUNT(*) FROM recruitments WHERE {where}", params)
        rows = await database.fetch_all(
            f"""
            SELECT * FROM recruitments WHERE {where}
            ORDER BY application_deadline ASC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return {
            "recruitments": [as_dict(row) for row in rows],
            **page_info(total or 0, page, limit),
        }

    @staticmethod
    async def list_club_recruitments(club_name: str) -> list:
        rows = await database.fetch_all(
            """
            SELECT * FROM recruitments
            WHERE club_name = :club_name AND is_active = TRUE
            ORDER BY application_deadline ASC
            """,
            {"club_name": club_name}
        )
        return [as_dict(row) for row in rows]


# Create singleton instance
recruitment_service = RecruitmentService()
