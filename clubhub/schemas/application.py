"""
Club Application Request/Response Models
"""

from pydantic import Field, field_validator
from typing import Optional, List, Any, Union
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, ApplicationStatus, parse_json_column
from clubhub.schemas.recruitment import RecruitmentSummary


class AnswerSubmission(CamelModel):
    """One answer as submitted; its type is resolved against the question later"""
    question_text: str = Field(..., min_length=1)
    answer: Union[List[Any], str, int, float, bool, None] = None

    @field_validator("question_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Answer questionText is required")
        return v


class ClubApplicationRequest(CamelModel):
    """Body of POST /recruitments/{recruitment_id}/applications"""
    phone: Optional[str] = Field(default=None, max_length=30, pattern=r"^\+?[0-9][0-9\s\-]{5,20}$")
    applied_position: str = Field(..., min_length=1, max_length=200)
    experience: Optional[str] = None
    skills: Optional[str] = None
    why_join: str = Field(..., min_length=1)
    portfolio: Optional[str] = None
    resume: Optional[str] = None
    answers: List[AnswerSubmission] = Field(default_factory=list)

    @field_validator("applied_position", "why_join")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class AnswerResponse(CamelModel):
    question_text: str
    answer: Any = None


class ApplicationResponse(CamelModel):
    """Application with the student snapshot taken at submission"""
    id: UUID
    recruitment_id: UUID
    student_id: UUID
    student_name: str
    roll_number: str = ""
    department: str = ""
    email: str
    phone: str = ""
    applied_position: str
    experience: str = ""
    skills: str = ""
    why_join: str
    portfolio: str = ""
    resume: str = ""
    answers: List[AnswerResponse] = Field(default_factory=list)
    status: ApplicationStatus
    feedback: str = ""
    interview_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    recruitment: Optional[RecruitmentSummary] = None

    @field_validator("answers", mode="before")
    @classmethod
    def parse_answers(cls, v):
        return parse_json_column(v) or []


class ApplicationListResponse(CamelModel):
    applications: List[ApplicationResponse]
    total: int
    total_pages: int
    current_page: int


class UpdateApplicationStatusRequest(CamelModel):
    """Admin review action"""
    status: ApplicationStatus
    feedback: Optional[str] = Field(default=None, max_length=5000)
    interview_date: Optional[datetime] = None
