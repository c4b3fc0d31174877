"""
Recruitment Request/Response Models
Positions and the per-recruitment question schema
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from clubhub.schemas.common import CamelModel, ClubName, FieldType, parse_json_column

OPTION_FIELD_TYPES = {FieldType.SELECT, FieldType.MULTISELECT}


class PositionSchema(CamelModel):
    """An open role; count is descriptive only"""
    role: str = Field(..., min_length=1, max_length=200)
    count: int = Field(default=1, ge=1)
    requirements: str = Field(..., min_length=1)

    @field_validator("role")
    @classmethod
    def strip_role(cls, v: str) -> str:
        return v.strip()


class QuestionSchema(CamelModel):
    """
    A custom question attached to a recruitment

    question_text is the key answers are matched on. Options are only kept
    for select and multiselect questions.
    """
    question_text: str = Field(..., min_length=1, max_length=500)
    field_type: FieldType = FieldType.LONG_TEXT
    required: bool = True
    options: List[str] = Field(default_factory=list)

    @field_validator("question_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("question text must not be blank")
        return v

    @model_validator(mode="after")
    def normalize_options(self):
        if self.field_type in OPTION_FIELD_TYPES:
            self.options = [o.strip() for o in self.options if o and o.strip()]
        else:
            self.options = []
        return self


def _check_unique_questions(questions: Optional[List[QuestionSchema]]):
    if not questions:
        return
    seen = set()
    for q in questions:
        if q.question_text in seen:
            raise ValueError(f"Duplicate question: {q.question_text}")
        seen.add(q.question_text)


class CreateRecruitmentRequest(CamelModel):
    """Request to open a recruitment drive (club taken from the admin)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    eligibility: Optional[str] = None
    application_deadline: Optional[datetime] = None
    application_process: Optional[str] = None
    positions: Optional[List[PositionSchema]] = None
    tags: List[str] = Field(default_factory=list)
    questions: List[QuestionSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_questions(self):
        _check_unique_questions(self.questions)
        return self


class UpdateRecruitmentRequest(CamelModel):
    """Partial update; club and creator cannot be changed"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    eligibility: Optional[str] = Field(default=None, min_length=1)
    application_deadline: Optional[datetime] = None
    application_process: Optional[str] = None
    positions: Optional[List[PositionSchema]] = Field(default=None, min_length=1)
    tags: Optional[List[str]] = None
    questions: Optional[List[QuestionSchema]] = None

    @model_validator(mode="after")
    def check_questions(self):
        _check_unique_questions(self.questions)
        return self


class RecruitmentResponse(CamelModel):
    """Recruitment details"""
    id: UUID
    club_name: ClubName
    created_by: UUID
    title: str
    description: str
    eligibility: str
    application_process: str
    application_deadline: datetime
    positions: List[PositionSchema]
    questions: List[QuestionSchema]
    tags: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("positions", "questions", "tags", mode="before")
    @classmethod
    def parse_json(cls, v):
        return parse_json_column(v) or []


class RecruitmentListResponse(CamelModel):
    recruitments: List[RecruitmentResponse]
    total: int
    total_pages: int
    current_page: int


class RecruitmentSummary(CamelModel):
    """Recruitment fields embedded in application listings"""
    title: str
    club_name: ClubName
    application_deadline: datetime
