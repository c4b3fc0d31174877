"""
Event Models
Club events and student registrations for them
"""

from sqlalchemy import (
    Column, String, Integer, Boolean, Text, DateTime, ForeignKey, UniqueConstraint, Index, func
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
from clubhub.database import Base, JSONType


class Event(Base):
    __tablename__ = "events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    club_name = Column(String(50), nullable=False)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(DateTime(timezone=True), nullable=False)
    event_time = Column(String(50), nullable=False)
    venue = Column(String(200), nullable=False)
    image = Column(Text, nullable=True)
    event_type = Column(String(20), nullable=False, default="other")
    tags = Column(JSONType, nullable=False, default=list)

    # Registration gates
    max_participants = Column(Integer, nullable=True)  # NULL = unlimited
    registration_deadline = Column(DateTime(timezone=True), nullable=True)  # NULL = event date

    # Soft delete
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    creator = relationship("User", backref="created_events")

    __table_args__ = (
        Index("ix_events_club_name_event_date", "club_name", "event_date"),
        Index("ix_events_is_active_event_date", "is_active", "event_date"),
    )


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(UUID(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Snapshot of the student profile at registration time
    student_name = Column(String(100), nullable=False)
    roll_number = Column(String(50), nullable=False, default="")
    department = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=False)

    phone = Column(String(30), nullable=True)
    additional_info = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="registered")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", backref="registrations")
    student = relationship("User", backref="event_registrations")

    __table_args__ = (
        # One registration per student per event, whatever its status
        UniqueConstraint("event_id", "student_id", name="uq_event_registrations_event_student"),
        Index("ix_event_registrations_student_created", "student_id", "created_at"),
    )
