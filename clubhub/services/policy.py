"""
Capacity & Deadline Policy
Decides whether an event or recruitment is still accepting submissions
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from clubhub.clock import as_utc
from clubhub.errors import PolicyRejection, RejectionReason

# Registration statuses that take up a seat
ACTIVE_REGISTRATION_STATUSES = ("registered", "confirmed")


class PolicyOutcome(str, Enum):
    ALLOWED = "allowed"
    INACTIVE = "inactive"
    DEADLINE_PASSED = "deadline_passed"
    ALREADY_OCCURRED = "already_occurred"
    CAPACITY_FULL = "capacity_full"


REJECTION_MESSAGES = {
    PolicyOutcome.INACTIVE: "Not accepting submissions",
    PolicyOutcome.DEADLINE_PASSED: "Registration deadline has passed",
    PolicyOutcome.ALREADY_OCCURRED: "Cannot register for past events",
    PolicyOutcome.CAPACITY_FULL: "Event is full",
}


def evaluate_submission_window(
    is_active: bool,
    now: datetime,
    deadline: Optional[datetime] = None,
    occurs_at: Optional[datetime] = None,
    active_count: Optional[int] = None,
    max_participants: Optional[int] = None
) -> PolicyOutcome:
    """
    Run the window checks in order; the first failing rule wins

    1. the target must be active
    2. it must not have happened yet
    3. an explicit deadline must not have passed
    4. a finite capacity must not be used up

    Deadlines are exclusive: a submission at exactly the deadline is late.
    """
    if not is_active:
        return PolicyOutcome.INACTIVE

    now = as_utc(now)

    if occurs_at is not None and now >= as_utc(occurs_at):
        return PolicyOutcome.ALREADY_OCCURRED

    if deadline is not None and now >= as_utc(deadline):
        return PolicyOutcome.DEADLINE_PASSED

    if max_participants is not None and (active_count or 0) >= max_participants:
        return PolicyOutcome.CAPACITY_FULL

    return PolicyOutcome.ALLOWED


def check_event(event: dict, now: datetime, active_count: int) -> PolicyOutcome:
    """Event variant: occurrence date, optional deadline and seat count"""
    return evaluate_submission_window(
        is_active=bool(event["is_active"]),
        now=now,
        deadline=event.get("registration_deadline"),
        occurs_at=event["event_date"],
        active_count=active_count,
        max_participants=event.get("max_participants"),
    )


def check_recruitment(recruitment: dict, now: datetime) -> PolicyOutcome:
    """Recruitment variant: deadline only, no capacity"""
    return evaluate_submission_window(
        is_active=bool(recruitment["is_active"]),
        now=now,
        deadline=recruitment["application_deadline"],
    )


def raise_for_outcome(outcome: PolicyOutcome, message: Optional[str] = None):
    """Turn a refusing outcome into a PolicyRejection; ALLOWED is a no-op"""
    if outcome == PolicyOutcome.ALLOWED:
        return
    raise PolicyRejection(
        RejectionReason(outcome.value),
        message or REJECTION_MESSAGES[outcome]
    )
