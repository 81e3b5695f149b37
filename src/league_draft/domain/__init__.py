"""
Domain Layer - Pure Business Logic

Contains entities, value objects, domain services, and business rules.
No external dependencies allowed in this layer.
"""

from .entities.draft import PER_TEAM_LIMIT, Draft, DraftPick, DraftSettings
from .entities.draft_status import DraftStatus
from .exceptions import (
    ConflictError,
    ContestantUnavailableError,
    DraftError,
    InvalidDraftStateError,
    NotFoundError,
    TeamLimitError,
    TransientStorageError,
    TurnError,
    ValidationError,
)

__all__ = [
    "Draft",
    "DraftPick",
    "DraftSettings",
    "DraftStatus",
    "PER_TEAM_LIMIT",
    "ConflictError",
    "ContestantUnavailableError",
    "DraftError",
    "InvalidDraftStateError",
    "NotFoundError",
    "TeamLimitError",
    "TransientStorageError",
    "TurnError",
    "ValidationError",
]
