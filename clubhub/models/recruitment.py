"""
Recruitment Models
Membership drives and the applications students submit to them
"""

from sqlalchemy import (
    Column, String, Boolean, Text, DateTime, ForeignKey, UniqueConstraint, Index, func
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from clubhub.database import Base, JSONType


class Recruitment(Base):
    __tablename__ = "recruitments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    club_name = Column(String(50), nullable=False)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    eligibility = Column(Text, nullable=False)
    application_process = Column(Text, nullable=False, default="Apply through the portal")
    application_deadline = Column(DateTime(timezone=True), nullable=False)
    tags = Column(JSONType, nullable=False, default=list)

    # [{role, count, requirements}]
    positions = Column(JSONType, nullable=False, default=list)

    # [{question_text, field_type, required, options}]
    questions = Column(JSONType, nullable=False, default=list)

    # Soft delete
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    creator = relationship("User", backref="created_recruitments")

    __table_args__ = (
        Index("ix_recruitments_club_name_deadline", "club_name", "application_deadline"),
        Index("ix_recruitments_is_active_deadline", "is_active", "application_deadline"),
    )


class ClubApplication(Base):
    __tablename__ = "club_applications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    recruitment_id = Column(UUID(as_uuid=True), ForeignKey("recruitments.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Snapshot of the student profile at submission time
    student_name = Column(String(100), nullable=False)
    roll_number = Column(String(50), nullable=False, default="")
    department = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False, default="")

    applied_position = Column(String(200), nullable=False)
    experience = Column(Text, nullable=False, default="")
    skills = Column(Text, nullable=False, default="")
    why_join = Column(Text, nullable=False)
    portfolio = Column(Text, nullable=False, default="")
    resume = Column(Text, nullable=False, default="")

    # [{question_text, answer}]
    answers = Column(JSONType, nullable=False, default=list)

    # Review
    status = Column(String(20), nullable=False, default="applied")
    feedback = Column(Text, nullable=False, default="")
    interview_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    recruitment = relationship("Recruitment", backref="applications")
    student = relationship("User", backref="club_applications")

    __table_args__ = (
        # One application per student per recruitment
        UniqueConstraint("recruitment_id", "student_id", name="uq_club_applications_recruitment_student"),
        Index("ix_club_applications_student_created", "student_id", "created_at"),
    )
