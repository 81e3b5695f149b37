"""
Domain Services

Stateless rules of the draft: turn order, completion, validation and the
lifecycle transitions built on them.
"""

from .completion import is_complete
from .draft_orchestrator import DraftOrchestrator
from .turn_order import current_round, current_team_id, team_for_pick
from .validation_service import PickValidator, ValidationService, validate_required

__all__ = [
    "DraftOrchestrator",
    "PickValidator",
    "ValidationService",
    "current_round",
    "current_team_id",
    "is_complete",
    "team_for_pick",
    "validate_required",
]
