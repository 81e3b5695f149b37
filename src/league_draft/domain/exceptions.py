"""
Domain Exceptions

Draft rule violations and storage failures.

Every error carries a stable ``code`` and a ``should_refetch`` hint so a client
can tell "reload the draft and decide again" apart from a permanent failure.
"""

from typing import Optional


class DraftError(Exception):
    """Base exception for all draft-related errors"""

    code = "DRAFT_ERROR"
    should_refetch = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DraftError):
    """Raised when input is missing or the league cannot support a draft"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidDraftStateError(DraftError):
    """Raised when attempting an operation in the wrong lifecycle state"""

    code = "INVALID_STATE"
    should_refetch = True


class TurnError(DraftError):
    """Raised when a team picks out of turn"""

    code = "NOT_YOUR_TURN"
    should_refetch = True


class ContestantUnavailableError(DraftError):
    """Raised when a contestant has already been drafted"""

    code = "CONTESTANT_UNAVAILABLE"
    should_refetch = True


class TeamLimitError(DraftError):
    """Raised when a team's roster is already full"""

    code = "TEAM_LIMIT_REACHED"


class NotFoundError(DraftError):
    """Raised when a draft, team or contestant does not exist"""

    code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        suffix = f" with id {resource_id}" if resource_id else ""
        super().__init__(f"{resource}{suffix} not found")
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(DraftError):
    """Raised when a conditional write loses against a concurrent mutation"""

    code = "CONFLICT"
    should_refetch = True


class TransientStorageError(DraftError):
    """Raised for network or storage hiccups that are safe to retry"""

    code = "TRANSIENT_FAILURE"
