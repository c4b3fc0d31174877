"""
Application Status State Machine
"""

from typing import Dict, FrozenSet

from clubhub.config import settings
from clubhub.errors import PolicyRejection, RejectionReason
from clubhub.schemas.common import ApplicationStatus

ALL_STATUSES = frozenset(ApplicationStatus)

# Admins may move an application anywhere, including back to 'applied'
PERMISSIVE: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    status: ALL_STATUSES for status in ApplicationStatus
}

FORWARD_ONLY: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: frozenset({
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.SELECTED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.UNDER_REVIEW: frozenset({
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.SELECTED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.SHORTLISTED: frozenset({
        ApplicationStatus.SELECTED,
        ApplicationStatus.REJECTED,
    }),
    ApplicationStatus.SELECTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}

POLICIES = {
    "permissive": PERMISSIVE,
    "forward_only": FORWARD_ONLY,
}


def get_transitions(policy: str = None) -> Dict[ApplicationStatus, FrozenSet[ApplicationStatus]]:
    policy = policy or settings.APPLICATION_STATUS_POLICY
    try:
        return POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown application status policy: {policy}")


def can_transition(current: str, target: str, policy: str = None) -> bool:
    """Re-setting the current status is always allowed"""
    current = ApplicationStatus(current)
    target = ApplicationStatus(target)
    if current == target:
        return True
    return target in get_transitions(policy)[current]


def ensure_transition(current: str, target: str, policy: str = None):
    if not can_transition(current, target, policy):
        raise PolicyRejection(
            RejectionReason.INVALID_STATUS_TRANSITION,
            f"Cannot change application status from {ApplicationStatus(current).value} "
            f"to {ApplicationStatus(target).value}"
        )
