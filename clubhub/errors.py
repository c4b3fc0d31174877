"""
Error Taxonomy
Domain exceptions raised by services and translated to HTTP responses in main.py
"""

from enum import Enum
from typing import List, Optional


class RejectionReason(str, Enum):
    """Why a business rule refused a submission"""
    INACTIVE = "inactive"
    DEADLINE_PASSED = "deadline_passed"
    ALREADY_OCCURRED = "already_occurred"
    CAPACITY_FULL = "capacity_full"
    INVALID_POSITION = "invalid_position"
    ALREADY_REGISTERED = "already_registered"
    ALREADY_APPLIED = "already_applied"
    MISSING_REQUIRED_ANSWERS = "missing_required_answers"
    INVALID_OPTION_VALUE = "invalid_option_value"
    INVALID_STATUS_TRANSITION = "invalid_status_transition"
    ALREADY_EXISTS = "already_exists"


class ClubHubError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ClubHubError):
    """Malformed or missing input, caught before business rules run"""
    status_code = 400

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundError(ClubHubError):
    status_code = 404


class AuthorizationError(ClubHubError):
    status_code = 403


class PolicyRejection(ClubHubError):
    """
    A business rule refused the action

    Always a 400; `missing` lists unanswered required questions when the
    reason is MISSING_REQUIRED_ANSWERS.
    """
    status_code = 400

    def __init__(
        self,
        reason: RejectionReason,
        message: str,
        missing: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.reason = reason
        self.missing = missing

    def to_dict(self) -> dict:
        body = {"message": self.message, "reason": self.reason.value}
        if self.missing is not None:
            body["missing"] = self.missing
        return body


class UnexpectedError(ClubHubError):
    """Infrastructure failure; details are logged, not returned"""
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
