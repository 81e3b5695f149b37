"""
League Draft Engine - Hexagonal Architecture Implementation

Runs the fantasy-league draft: teams take turns claiming contestants in a
randomized snake or linear order until every roster holds five. State lives
in a versioned draft record so any number of stateless callers can drive the
same draft.
"""

from .application.draft_service import DraftApplicationService
from .infrastructure.container import DraftContainer, initialize_container

__all__ = [
    "DraftApplicationService",
    "DraftContainer",
    "initialize_container",
]
